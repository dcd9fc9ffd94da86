"""auth/ -- Authentication and authorization package for the bookmark service.

Layer rule: auth/ imports only stdlib + third-party libraries.
It does NOT import from api/ or bookmarks/.
api/ imports from auth/, not the other way around.
"""
