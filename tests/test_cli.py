"""End-to-end tests for the pantrypal command line."""

import json
from datetime import date, timedelta

import pytest

from pantrypal.cli import main


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "pantrypal.toml"
    path.write_text(
        "[database]\n"
        f'path = "{(tmp_path / "pantry.db").as_posix()}"\n'
    )
    return str(path)


def _future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "pantrypal" in capsys.readouterr().out


def test_add_then_list(config_file, capsys):
    main(["-c", config_file, "add", "Milk", "1L", _future(10), "-l", "fridge"])
    out = capsys.readouterr().out
    assert "Added Milk (1L) to Fridge" in out

    main(["-c", config_file, "list", "--json"])
    items = json.loads(capsys.readouterr().out)
    assert [i["name"] for i in items] == ["Milk"]
    assert items[0]["storage_location"] == "Fridge"
    assert items[0]["urgency"] == "safe"


def test_add_rejects_past_date(config_file, capsys):
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    with pytest.raises(SystemExit) as exc:
        main(["-c", config_file, "add", "Milk", "1L", yesterday])
    assert exc.value.code == 1
    assert "past" in capsys.readouterr().err


def test_add_rejects_unknown_location(config_file, capsys):
    with pytest.raises(SystemExit):
        main(["-c", config_file, "add", "Milk", "1L", _future(5), "-l", "garage"])
    assert "Unknown storage location" in capsys.readouterr().err


def test_summary_json(config_file, capsys):
    main(["-c", config_file, "add", "Yogurt", "2", _future(2), "-l", "Fridge"])
    main(["-c", config_file, "add", "Rice", "1kg", _future(200)])
    capsys.readouterr()

    main(["-c", config_file, "summary", "--json"])
    summary = json.loads(capsys.readouterr().out)
    assert summary["total"] == 2
    assert summary["expiring_soon"] == 1


def test_delete_cancels_reminder(config_file, capsys):
    main(["-c", config_file, "add", "Cheese", "200g", _future(3), "-l", "Fridge"])
    capsys.readouterr()
    main(["-c", config_file, "list", "--json"])
    item_id = json.loads(capsys.readouterr().out)[0]["id"]

    main(["-c", config_file, "reminders"])
    assert "Item Expiring Soon!" in capsys.readouterr().out

    main(["-c", config_file, "delete", item_id])
    assert f"Deleted {item_id}" in capsys.readouterr().out

    main(["-c", config_file, "reminders"])
    out = capsys.readouterr().out
    assert "Item Expiring Soon!" not in out


def test_reminders_clear(config_file, capsys):
    main(["-c", config_file, "add", "Eggs", "12", _future(3)])
    capsys.readouterr()

    main(["-c", config_file, "reminders", "--clear"])
    assert "Cancelled" in capsys.readouterr().out

    main(["-c", config_file, "reminders"])
    assert "No pending reminders." in capsys.readouterr().out


def test_recipes_without_api_key(config_file, capsys, monkeypatch):
    monkeypatch.delenv("SPOONACULAR_API_KEY", raising=False)
    with pytest.raises(SystemExit) as exc:
        main(["-c", config_file, "recipes", "eggs"])
    assert exc.value.code == 1
    assert "API key" in capsys.readouterr().err
