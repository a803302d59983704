# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog_search.schemas import Record  # noqa: E402


@pytest.fixture
def example_records() -> list[Record]:
    return [
        Record(id=1, title="Audit Checklist", text="Annual audit process", category="Finance", tags=("audit", "annual")),
        Record(id=2, title="Tender Guide", text="How to prepare a tender", category="Procurement", tags=("tender",)),
    ]


@pytest.fixture
def records() -> list[Record]:
    return [
        Record(id=1, title="Чеклист аудита", text="Ежегодный аудит: порядок и сроки", category="Финансы", tags=("аудит", "чеклист")),
        Record(id=2, title="Гайд по тендерам", text="Как подготовить заявку на тендер", category="Закупки", tags=("тендеры",)),
        Record(id=3, title="Бюджет на квартал", text="Шаблон бюджета", category="Финансы", tags=("бюджет",)),
        Record(id=4, title="Реестр поставщиков", text="Аудит договоров перед тендером, аудит контрагентов", category="Закупки", tags=("аудит",)),
        Record(id=5, title="Политика командировок", text=None, category="Кадры", tags=None),
    ]
