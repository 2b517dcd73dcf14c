from datetime import date

from app.client.render import format_date, render_profile, render_user_list


def test_format_date_in_spanish():
    assert format_date("2006-04-25T00:00:00+00:00") == "25 de abril de 2006"
    assert format_date(date(2000, 1, 1)) == "1 de enero de 2000"
    assert format_date(None) == "No disponible"
    assert format_date("yesterday") == "Fecha inválida"


def test_profile_shows_badges_and_fallbacks():
    html = render_profile({
        "name": "Ana",
        "lastName": "Pérez",
        "email": "ana@example.com",
        "roles": ["user", {"name": "admin"}],
        "birthdate": "2000-01-01",
    })

    assert '<span class="badge badge-user">user</span>' in html
    assert '<span class="badge badge-admin">admin</span>' in html
    assert "Ana Pérez" in html
    assert "1 de enero de 2000" in html
    assert "No especificada" in html


def test_profile_escapes_user_content():
    html = render_profile({"name": "<script>x</script>", "roles": []})

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_user_list_empty_state():
    assert "0 usuarios registrados" in render_user_list([])


def test_user_list_counts_and_renders_each_user():
    html = render_user_list([
        {"name": "A", "email": "a@b.com", "roles": ["user"], "createdAt": "2024-06-15T10:00:00+00:00"},
        {"name": "B", "email": "b@b.com", "roles": ["admin"]},
    ])

    assert "2 usuarios registrados" in html
    assert "15 de junio de 2024" in html
    assert "No disponible" in html
