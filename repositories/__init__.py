"""
repositories/ - Data Access Layer
==================================
Parameterized SQL for the customers entity. Each call borrows one pooled
connection and maps rows to Customer objects.
"""
