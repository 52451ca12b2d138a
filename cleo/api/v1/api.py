"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from cleo.api.v1.endpoints import fields, files, instance, keys, posts, tokens, users, verification

api_router = APIRouter()

# Accounts & credentials
api_router.include_router(users.router)
api_router.include_router(tokens.router)
api_router.include_router(keys.router, prefix="/keys")
api_router.include_router(keys.router, prefix="/user/keys", include_in_schema=False)
api_router.include_router(verification.router)

# Content
api_router.include_router(posts.router)
api_router.include_router(fields.router)
api_router.include_router(files.router)

# Instance settings
api_router.include_router(instance.router)
