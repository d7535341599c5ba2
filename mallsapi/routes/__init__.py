"""
Malls API Backend — API Routes Package
========================================

Route Inventory:
    - users.py:   POST /api/users, GET /api/users/me
    - auth.py:    POST /api/auth
    - malls.py:   /api/malls and everything nested under a mall
    - stores.py:  /api/stores
    - health.py:  GET /health

Routes stay thin: parse path ids, call a service, return its response model.
"""
