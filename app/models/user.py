from mongoengine import DateTimeField, ListField, ReferenceField, StringField
from bson.objectid import ObjectId
from bson.errors import InvalidId

from app.models.base import BaseDocument
from app.models.role import Role
from app.services.validation import EMAIL_RE


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(BaseDocument):
    """User document.

    Fields:
    - email (str, unique): Login identifier, stored trimmed and lower-cased
    - password (str, hashed): Bcrypt digest, never rendered by `to_output`
    - roles (list[Ref[Role]]): Empty until assigned at sign-up
    - name / last_name / phone_number / birthdate: Profile, required at sign-up
    - url_profile / address: Optional profile fields
    """
    # Same pattern the sign-up validator applies, so the store never disagrees with it
    email = StringField(required=True, null=False, unique=True, regex=EMAIL_RE.pattern)
    password = StringField(required=True, null=False)
    roles = ListField(ReferenceField(Role), default=list)

    name = StringField(required=True, null=False)
    last_name = StringField(db_field="lastName", required=True, null=False)
    phone_number = StringField(db_field="phoneNumber", required=True, null=False)
    birthdate = DateTimeField(required=True, null=False)
    url_profile = StringField(default="")
    address = StringField(db_field="adress", default="")

    output_names = {
        **BaseDocument.output_names,
        "last_name": "lastName",
        "phone_number": "phoneNumber",
        "address": "adress",
    }
    hidden_fields = ("password", "roles")

    meta = {
        "collection": "users",
        "indexes": [
            {"fields": ["email"], "unique": True},
        ],
    }

    def clean(self):
        self.email = normalize_email(self.email or "")
        for field in ("name", "last_name", "phone_number", "url_profile", "address"):
            value = getattr(self, field)
            if isinstance(value, str):
                setattr(self, field, value.strip())

    @classmethod
    def find_by_email(cls, email: str) -> "User | None":
        return cls.objects(email=normalize_email(email)).first()

    @classmethod
    def find_by_id(cls, user_id: str) -> "User | None":
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        return cls.objects(id=oid).first()

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles if isinstance(role, Role)]

    def to_output(self, fields=None, exclude=None):
        output = super().to_output(fields, exclude)
        output["roles"] = self.role_names
        return output
