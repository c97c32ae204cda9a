"""poi-extract CLI tests."""

from __future__ import annotations

import json

from poi_extractor.cli import main


def test_cli_extracts_from_wrapped_payload(tmp_path, capsys):
    path = tmp_path / "itinerary.json"
    path.write_text(
        json.dumps(
            {
                "activities": [{"title": "Visit the Louvre Museum", "category": "cultural"}],
                "trip_context": {"destination": "Paris, France"},
            }
        ),
        encoding="utf-8",
    )

    assert main([str(path), "--city", "Paris"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == [
        {"name": "Louvre Museum", "category": "cultural", "confidence": 1.0, "city": "Paris", "country": "France"}
    ]


def test_cli_threshold_and_output_file(tmp_path):
    path = tmp_path / "activities.json"
    path.write_text(json.dumps([{"title": "Visit the Louvre Museum"}, {"title": "Visit Hue"}]), encoding="utf-8")
    output = tmp_path / "out.json"

    assert main([str(path), "--threshold", "0.9", "--output", str(output)]) == 0
    rows = json.loads(output.read_text(encoding="utf-8"))
    assert [row["name"] for row in rows] == ["Louvre Museum"]


def test_cli_stats(capsys):
    assert main(["--stats", "--threshold", "0.7"]) == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats["confidenceThreshold"] == 0.7


def test_cli_rejects_bad_threshold(tmp_path, capsys):
    path = tmp_path / "activities.json"
    path.write_text("[]", encoding="utf-8")
    assert main([str(path), "--threshold", "2"]) == 2
    assert "confidence_threshold" in capsys.readouterr().err


def test_cli_requires_readable_file(tmp_path):
    assert main([]) == 2
    assert main([str(tmp_path / "missing.json")]) == 2
