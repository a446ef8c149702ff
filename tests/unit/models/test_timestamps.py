"""Tests for the timezone-aware timestamp columns."""

import datetime

from sqlalchemy import DateTime

from app.models.military import Military
from app.models.process import Process
from app.models.timestamps import utcnow


class TestTimestamps:
    def test_utcnow_is_aware(self):
        assert utcnow().utcoffset() == datetime.timedelta(0)

    def test_defaults_are_aware(self):
        military = Military(name="João", rank="3º Sargento", branch="Infantaria", squadron="Base Adm")
        process = Process(type="PT", process_class="Classe X - Diversos", number="001/2024",
                          start_date=datetime.date(2024, 1, 1))

        for row in (military, process):
            assert row.created_at.tzinfo is not None
            assert row.updated_at.tzinfo is not None

    def test_columns_store_timezone(self):
        for table in (Military.__table__, Process.__table__):
            for name in ("created_at", "updated_at"):
                column = table.c[name]
                assert isinstance(column.type, DateTime)
                assert column.type.timezone is True
                assert column.nullable is False
