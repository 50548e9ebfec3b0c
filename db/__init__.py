"""
db/ - Database Layer
====================
Opens connections for the application and creates the tables backing the
example entities. The mapper in orm/ only ever receives connections from here.
"""
