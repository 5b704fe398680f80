import mysql.connector

from hrflow_attendance.database.connection import DatabaseConnection, DBConfig

CONFIG = DBConfig(host="localhost", port="3306", user="hr", password="secret", database="hrflow_attendance")


def test_connect_pins_session_to_utc(monkeypatch):
    captured = {}

    def fake_connect(**kwargs):
        captured.update(kwargs)
        return object()

    monkeypatch.setattr(mysql.connector, "connect", fake_connect)

    DatabaseConnection(CONFIG).connect()

    assert captured["time_zone"] == "+00:00"
    assert captured["port"] == 3306
    assert captured["database"] == "hrflow_attendance"


def test_get_instance_reuses_first_factory(monkeypatch):
    monkeypatch.setattr(DatabaseConnection, "_instance", None)

    first = DatabaseConnection.get_instance(CONFIG)
    second = DatabaseConnection.get_instance(DBConfig("other", 3307, "x", "y", "z"))

    assert first is second
