from subsite.extensions import db


class AnalyticsEvent(db.Model):
    __tablename__ = "analytics"

    # visitor@hostname/path; primary key so duplicate visits collapse to one row
    hash = db.Column(db.String(256), primary_key=True)
    url = db.Column(db.String(128))
