from storefront.utils.config import Settings


def test_sqlite_writers_queue_at_begin():
    config = Settings(DATABASE_ENGINE="sqlite", DATABASE_NAME="data/shop.sqlite3").database_config()

    assert config["ENGINE"] == "django.db.backends.sqlite3"
    assert config["OPTIONS"] == {"transaction_mode": "IMMEDIATE", "timeout": 20}
    assert config["TEST"]["NAME"] == "data/test_shop.sqlite3"


def test_postgresql_config_has_no_sqlite_options():
    config = Settings(DATABASE_ENGINE="postgresql", DATABASE_NAME="shop").database_config()

    assert config["ENGINE"] == "django.db.backends.postgresql"
    assert "OPTIONS" not in config
