from app.seed import seed_database
from models import Restaurant, User


def test_seed_db_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-db"])
    assert result.exit_code == 0, result.output
    assert "users=6" in result.output
    assert "restaurants=6" in result.output
    assert "menu_items=48" in result.output
    assert "payment_methods=6" in result.output


def test_seed_is_idempotent(app):
    seed_database()
    assert seed_database() == {"users": 0, "restaurants": 0, "menu_items": 0, "payment_methods": 0}
    assert User.query.count() == 6


def test_seed_reset_reloads(app, make_user):
    make_user("member", "india")
    counts = seed_database(reset=True)
    assert counts["users"] == 6
    assert User.query.count() == 6


def test_seeded_data_is_country_partitioned(app):
    seed_database()
    assert {r.country for r in Restaurant.query.all()} == {"india", "america"}
    assert Restaurant.query.filter_by(country="india").count() == 3
    fury = User.query.filter_by(email="nick.fury@test.com").one()
    assert (fury.role, fury.country) == ("admin", "america")
    assert fury.check_password("admin123")


def test_seeded_users_can_log_in(client):
    seed_database()
    r = client.post("/api/v1/auth/login", json={"email": "thanos@test.com", "password": "member123"})
    assert r.status_code == 200
    assert r.get_json()["data"]["user"]["country"] == "india"


def test_migrations_refused_in_production(app, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("ALLOW_DB_MIGRATIONS", raising=False)
    result = app.test_cli_runner().invoke(args=["db-upgrade-safe"])
    assert result.exit_code != 0
    assert "Refusing" in result.output
