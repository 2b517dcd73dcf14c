from app.models.role import Role
from app.models.user import User
from app.services.auth import PasswordHasher
from app.services.seed import seed_admin, seed_roles


def test_seed_roles_is_idempotent():
    seed_roles()
    seed_roles()

    assert sorted(r.name for r in Role.objects) == ["admin", "user"]


def test_seed_admin_creates_bootstrap_account_once(settings):
    first = seed_admin(settings)
    second = seed_admin(settings)

    assert first.id == second.id
    assert User.objects(email="root@example.com").count() == 1
    assert first.role_names == ["admin"]
    assert PasswordHasher(rounds=4).verify("Root1234#", first.password)


def test_seed_admin_skips_when_roles_missing(settings):
    Role.drop_collection()

    assert seed_admin(settings) is None
    assert User.objects.count() == 0


def test_reseed_script_resets_users_and_roles(make_user, monkeypatch):
    from app.scripts import seed as seed_script

    monkeypatch.setattr(seed_script, "init_mongo", lambda settings: None)
    monkeypatch.setattr(seed_script, "close_mongo", lambda: None)
    make_user("someone@b.com")

    seed_script.seed(reset=True)

    assert User.find_by_email("someone@b.com") is None
    assert sorted(r.name for r in Role.objects) == ["admin", "user"]
    assert User.find_by_email(seed_script.settings.admin_email) is not None


def test_seed_admin_carries_optional_profile_fields(settings):
    admin = seed_admin(settings)

    assert admin.url_profile == "https://github.com/root"
    assert admin.address == "Lima, Perú"
    assert admin.to_output()["adress"] == "Lima, Perú"
