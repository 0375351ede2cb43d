"""Diagnostic collector tests."""

from __future__ import annotations

import logging

from simple_openapi_builder.build_diagnostics import (
    BuildDiagnostic,
    DiagnosticCollector,
    DiagnosticKind,
)


def test_collector_keeps_recording_order_and_filters_by_kind() -> None:
    collector = DiagnosticCollector()
    collector.record(DiagnosticKind.UNSUPPORTED_TYPE, "Animal.payload", subject="Animal")
    collector.record(DiagnosticKind.ROUTE_METHOD_COLLISION, "GET /animals", subject="/animals")

    assert [item.kind for item in collector.snapshot()] == [
        DiagnosticKind.UNSUPPORTED_TYPE,
        DiagnosticKind.ROUTE_METHOD_COLLISION,
    ]
    assert collector.of_kind(DiagnosticKind.ROUTE_METHOD_COLLISION) == (
        BuildDiagnostic(
            kind=DiagnosticKind.ROUTE_METHOD_COLLISION,
            message="GET /animals",
            subject="/animals",
        ),
    )
    assert len(collector) == 2


def test_recorded_diagnostics_are_logged_as_warnings(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="simple_openapi_builder")
    collector = DiagnosticCollector()

    collector.record(DiagnosticKind.UNRESOLVED_REFERENCE, "dangling pointer")

    assert "[unresolved_reference] dangling pointer" in caplog.text
    assert caplog.records[-1].levelno == logging.WARNING
