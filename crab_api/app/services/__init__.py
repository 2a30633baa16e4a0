"""
Service layer.

Services own the SQL.  Route handlers call them with the pool they
received as a dependency and never touch a connection directly.
"""
