"""Public pages and authentication"""

from coffeerun.extensions import db
from coffeerun.models import User


def test_landing_page_lists_active_products(client, make_product):
    make_product(name="Macaroons", price="4.00")
    make_product(name="Retired", active=False)

    response = client.get("/")

    assert response.status_code == 200
    assert b"Macaroons - $4.00" in response.data
    assert b"Retired" not in response.data


def test_health_check(client):
    response = client.get("/up")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_products_requires_login(client):
    response = client.get("/products")
    assert response.status_code == 302
    assert "/login" in response.headers["Location"]


def test_products_hides_inactive(client, customer, make_product):
    make_product(name="Donuts")
    make_product(name="Retired", active=False)

    response = client.get("/products")

    assert b"Donuts" in response.data
    assert b"Retired" not in response.data


def test_unknown_page_is_404(client):
    assert client.get("/nowhere").status_code == 404


def test_register_logs_user_in(app, client):
    response = client.post("/register", data={
        "email": "New.Person@example.com",
        "password": "password123",
        "confirm_password": "password123",
    })

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/products")
    assert client.get("/products").status_code == 200
    with app.app_context():
        user = db.session.scalars(db.select(User)).one()
        assert user.email == "new.person@example.com"
        assert user.is_admin() is False


def test_register_rejects_taken_email(app, client, make_user):
    make_user()

    response = client.post("/register", data={
        "email": "customer@example.com",
        "password": "password123",
        "confirm_password": "password123",
    })

    assert response.status_code == 200
    with app.app_context():
        assert User.query.count() == 1


def test_bad_password_is_rejected(client, make_user):
    make_user()

    response = client.post("/login", data={"email": "customer@example.com", "password": "nope"})

    assert response.status_code == 200
    assert b"Invalid email or password." in response.data


def test_login_honours_local_next(client, make_user):
    make_user()

    response = client.post("/login?next=/orders",
                           data={"email": "customer@example.com", "password": "password123"})

    assert response.headers["Location"].endswith("/orders")


def test_login_ignores_external_next(client, make_user):
    make_user()

    response = client.post("/login?next=http://evil.example.com/",
                           data={"email": "customer@example.com", "password": "password123"})

    assert "evil.example.com" not in response.headers["Location"]


def test_logout(client, customer):
    response = client.get("/logout")

    assert response.status_code == 302
    assert client.get("/products").status_code == 302
