from __future__ import annotations

import re

import pytest

from core.models import Permission
from core.services.auth.policy import PERMISSION_DESCRIPTIONS, list_permissions


_IDENTIFIER_RE = re.compile(r"^[a-z]+:[a-z]+$")


def test_registry_lists_the_full_closed_catalog():
    catalog = list_permissions()

    assert isinstance(catalog, frozenset)
    assert catalog == frozenset(Permission)
    assert len(catalog) == 29


def test_identifiers_are_unique_and_namespaced_by_resource():
    values = [p.value for p in Permission]

    assert len(values) == len(set(values))
    assert all(_IDENTIFIER_RE.match(value) for value in values)
    assert {p.resource for p in Permission} == {
        "project",
        "task",
        "team",
        "resource",
        "document",
        "user",
        "report",
        "settings",
        "system",
    }


def test_identifiers_are_stable_strings():
    assert Permission.PROJECT_EDIT == "project:edit"
    assert Permission("task:create") is Permission.TASK_CREATE
    assert Permission.REPORT_EXPORT.resource == "report"
    assert Permission.REPORT_EXPORT.action == "export"


def test_every_permission_has_a_description():
    assert set(PERMISSION_DESCRIPTIONS) == set(list_permissions())
    assert all(text.strip() for text in PERMISSION_DESCRIPTIONS.values())


def test_catalog_cannot_be_extended_at_runtime():
    catalog = list_permissions()

    with pytest.raises(AttributeError):
        catalog.add("project:archive")  # type: ignore[attr-defined]
    with pytest.raises(ValueError):
        Permission("project:archive")
