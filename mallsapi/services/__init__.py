"""
Malls API Backend — Services Layer
====================================

What:  Business rules between the routes (HTTP) and the database.
How:   Each service is a stateless class with a module-level singleton. It
       takes an AsyncSession, flushes its writes and returns response models;
       the request dependency owns commit and rollback.

Service Inventory:
    - UserService:  registration, login, profile, admin flag
    - MallService:  malls, mall↔store links, employees of a mall
    - StoreService: stores and the store deletion sweep
    - lookup:       get_or_404 shared by all of them
"""
