from typing import Any, List, Optional

from bson import ObjectId
from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pymongo import ReturnDocument

from bloglist.auth.deps import get_current_user, oauth2_scheme
from bloglist.database.connection import get_db
from bloglist.errors import NotFoundError
from bloglist.models.documents import BLOG_FIELDS, doc_to_dict
from bloglist.models.schemas import BlogCreate, BlogOut

router = APIRouter()


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": message})


@router.get("", response_model=List[BlogOut])
def list_blogs(db=Depends(get_db)):
    docs = list(db.blogs.find())
    owner_ids = list({d["user"] for d in docs if d.get("user")})
    owners = {
        u["_id"]: doc_to_dict(u)
        for u in db.users.find({"_id": {"$in": owner_ids}}, {"username": 1, "name": 1})
    }

    items = []
    for doc in docs:
        blog = doc_to_dict(doc)
        blog["user"] = owners.get(doc.get("user"))
        items.append(blog)
    return items


async def raw_body(request: Request) -> bytes:
    return await request.body()


@router.post("", status_code=201, response_model=BlogOut)
def create_blog(body: bytes = Depends(raw_body), user=Depends(get_current_user), db=Depends(get_db)):
    if not user:
        return _unauthorized("token invalid")

    owner = db.users.find_one({"_id": user["_id"]})
    if not owner:
        return _unauthorized("token invalid")

    # parsed only once the caller is known, malformed JSON is a validation error
    blog = BlogCreate.model_validate_json(body or b"{}")
    doc = blog.model_dump()
    doc["user"] = owner["_id"]
    res = db.blogs.insert_one(doc)
    doc["_id"] = res.inserted_id

    # atomic append, concurrent creates for one user don't overwrite each other
    db.users.update_one({"_id": owner["_id"]}, {"$push": {"blogs": res.inserted_id}})
    return doc_to_dict(doc)


@router.delete("/{blog_id}", status_code=204)
def delete_blog(
    blog_id: str,
    token: Optional[str] = Depends(oauth2_scheme),
    user=Depends(get_current_user),
    db=Depends(get_db),
):
    if not token:
        return _unauthorized("invalid token")
    if not user:
        return _unauthorized("token invalid")

    oid = ObjectId(blog_id)
    blog = db.blogs.find_one({"_id": oid})
    if not blog:
        raise NotFoundError("blog not found")

    if str(blog.get("user")) != str(user["_id"]):
        return _unauthorized("not authorized to delete the blog")

    db.blogs.delete_one({"_id": oid})
    db.users.update_one({"_id": blog["user"]}, {"$pull": {"blogs": oid}})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{blog_id}", response_model=BlogOut)
def update_blog(blog_id: str, payload: Any = Body(None), db=Depends(get_db)):
    oid = ObjectId(blog_id)
    current = db.blogs.find_one({"_id": oid})
    if not current:
        raise NotFoundError("blog not found")

    merged = {k: current[k] for k in BLOG_FIELDS if k in current}
    if isinstance(payload, dict):
        merged.update(payload)
    elif payload is not None:
        merged = payload
    fields = BlogCreate.model_validate(merged).model_dump()

    updated = db.blogs.find_one_and_update(
        {"_id": oid},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFoundError("blog not found")
    return doc_to_dict(updated)
