from jsonboard.routers.collections import build_collection_router

COLLECTION = "comments"
LABEL = "Comment"

router = build_collection_router(COLLECTION)
