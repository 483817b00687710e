"""Person model definition."""

from . import db


GENDERS = ("m", "f")


class Person(db.Model):
    """Profile details owned by exactly one user."""

    __tablename__ = "persons"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False)
    gender = db.Column(db.Enum(*GENDERS, name="person_gender"), nullable=False)
    birthday = db.Column(db.Date, nullable=False)
    height = db.Column(db.Float, nullable=False)
    weight = db.Column(db.Float, nullable=False)

    user = db.relationship("User", back_populates="person")

    def __repr__(self) -> str:
        return f"<Person id={self.id} user_id={self.user_id}>"

    def to_dict(self) -> dict:
        """Serialize the person into a dictionary."""

        return {
            "id": self.id,
            "user_id": self.user_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "gender": self.gender,
            "birthday": self.birthday.isoformat() if self.birthday else None,
            "height": self.height,
            "weight": self.weight,
        }
