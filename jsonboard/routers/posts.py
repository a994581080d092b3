from jsonboard.routers.collections import build_collection_router

COLLECTION = "posts"
LABEL = "Post"

router = build_collection_router(COLLECTION)
