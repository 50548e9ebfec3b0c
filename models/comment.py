"""
models/comment.py
-----------------
Domain model for article comments. The store assigns the numeric id.
"""

from orm import Entity, register


@register
class Comment(Entity):
    attributes = ("author", "content", "article", "createdAt")
    types = {"article": int}
