# Routes package init
"""
Anekazoo Animals API - API Routes Package
==========================================

Route Inventory:
    - animals.py: POST   /animals         (create)
                  GET    /animals         (list all)
                  GET    /animals/{id}    (get one)
                  PUT    /animals/{id}    (replace)
                  DELETE /animals/{id}    (delete)
    - health.py:  GET    /health          (service health check)

Routes stay thin: decode the request, call the animal store, pick the
status code. SQL lives in the services layer.
"""
