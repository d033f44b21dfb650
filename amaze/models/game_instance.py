import datetime

from amaze import db


class GameInstance(db.Model):
    """Persisted game session metadata.

    The maze grid itself is never stored: it is regenerated from ``seed`` and
    the size fields, then ``opened_doors`` and the position are replayed.
    """

    __tablename__ = "game_instances"
    id = db.Column(db.Integer, primary_key=True)
    seed = db.Column(db.BigInteger, nullable=False)
    width = db.Column(db.Integer, nullable=False)
    height = db.Column(db.Integer, nullable=False)
    seed_count = db.Column(db.Integer, nullable=False)
    pos_x = db.Column(db.Integer, default=0)
    pos_y = db.Column(db.Integer, default=0)
    # [{"x": int, "y": int}, ...] in the order doors were opened
    opened_doors = db.Column(db.JSON, default=list)
    # Opaque inventory bag; no item logic lives here
    inventory = db.Column(db.JSON, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    def to_snapshot(self):
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "seed_count": self.seed_count,
            "player": {"x": self.pos_x or 0, "y": self.pos_y or 0},
            "opened_doors": list(self.opened_doors or []),
            "inventory": dict(self.inventory or {}),
        }

    def apply_snapshot(self, snap):
        self.pos_x = snap["player"]["x"]
        self.pos_y = snap["player"]["y"]
        self.opened_doors = list(snap.get("opened_doors") or [])
        self.inventory = dict(snap.get("inventory") or {})

    def __repr__(self):
        return f"<GameInstance {self.id} seed={self.seed} size={self.width}x{self.height}>"
