from bson import ObjectId

BLOG_FIELDS = ("title", "author", "url", "likes")


def doc_to_dict(doc):
    """Mongo document -> JSON-ready dict: `_id` becomes `id`, ObjectIds become strings."""
    if not doc:
        return None
    out = {}
    for key, value in doc.items():
        if key == "_id":
            out["id"] = str(value)
        elif isinstance(value, ObjectId):
            out[key] = str(value)
        elif isinstance(value, list):
            out[key] = [str(v) if isinstance(v, ObjectId) else v for v in value]
        else:
            out[key] = value
    return out


def user_to_dict(doc, blogs=None):
    user = doc_to_dict(doc)
    user.pop("passwordHash", None)
    if blogs is not None:
        user["blogs"] = blogs
    return user
