"""Storefront admin service.

Admin product management (create, edit, availability, delete, download)
backed by a SQL database and local asset storage, plus the public storefront
pages that consume its cache invalidation.
"""

__version__ = "0.1.0"
