# This file marks the API package for the name registry HTTP service.
# Routers, services, and storage access live in sibling modules.
