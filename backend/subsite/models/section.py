from subsite.extensions import db
from .base import BaseModel


class Section(BaseModel):
    __tablename__ = "sections"

    title = db.Column(db.String(128))
