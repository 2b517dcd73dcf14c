from mongoengine import StringField

from app.models.base import BaseDocument
from app.utils.base import RoleName


class Role(BaseDocument):
    """Role reference data.

    Fields:
    - name (str, unique): one of `RoleName`

    Seeded at startup and never mutated afterwards.
    """
    name = StringField(required=True, null=False, unique=True, choices=RoleName.choices())

    meta = {
        "collection": "roles",
        "indexes": [
            {"fields": ["name"], "unique": True},
        ],
    }

    @classmethod
    def get(cls, name: RoleName) -> "Role | None":
        return cls.objects(name=name.value).first()

