from app.utils.base.enums import BaseEnum, RoleName, DEFAULT_ROLE

__all__ = ["BaseEnum", "RoleName", "DEFAULT_ROLE"]
