# Services package init
"""
Postboard API: Services Layer
==============================

What:  Business rules between the routes (HTTP) and the stores.
How:   Services take validated schemas, raise PostboardError subclasses, and
       are injected into routes through postboard.dependencies.

Service Inventory:
    - TokenService: HS256 token issue/verify
    - UserService:  user CRUD, email uniqueness, login
    - PostService:  post CRUD with author/published/search filters
"""
