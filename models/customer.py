"""
models/customer.py
------------------
Domain model for customers stored in the `clientes` table.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Customer:
    """
    Represents a single customer.

    Attributes:
        nome: Customer name, required, at most 100 characters.
        idade: Age in years.
        uf: Two-letter state code (e.g., 'SP').
        id: Database primary key (None for new records).
    """
    nome: str
    idade: Optional[int] = None
    uf: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        idade = "-" if self.idade is None else self.idade
        return f"#{self.id} {self.nome} ({idade}) {self.uf or '--'}"
