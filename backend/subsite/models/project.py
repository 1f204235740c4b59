from subsite.extensions import db
from .base import BaseModel


class Project(BaseModel):
    __tablename__ = "projects"

    section = db.Column(db.Integer, db.ForeignKey("sections.id"), nullable=False, index=True)
    title = db.Column(db.String(128))
    url = db.Column(db.String(64), nullable=True)
    repo = db.Column(db.String(256), nullable=True)  # github link
