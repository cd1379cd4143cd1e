from snakeboard import db
from snakeboard.services.leaderboard.entries import MAX_NAME_LENGTH, ScoreEntry, as_utc


class Score(db.Model):
    __tablename__ = 'scores'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(MAX_NAME_LENGTH), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0, server_default='0', index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    @classmethod
    def ranked(cls):
        """Query ordered best first; id breaks ties between identical timestamps."""
        return cls.query.order_by(cls.score.desc(), cls.created_at.asc(), cls.id.asc())

    @classmethod
    def from_entry(cls, entry: ScoreEntry) -> 'Score':
        return cls(name=entry.name, score=entry.score, created_at=entry.created_at)

    def to_entry(self) -> ScoreEntry:
        return ScoreEntry(name=self.name, score=self.score, created_at=as_utc(self.created_at))
