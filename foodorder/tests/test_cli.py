import io
import json

import pytest

from foodorder import main as cli
from foodorder.utilities.constants import SEED_FOOD_ITEMS


@pytest.fixture
def run(tmp_path, monkeypatch):
    """Run the CLI against a fresh seeded database; returns (exit_code, output)."""
    monkeypatch.setattr(cli, "SEED_ON_CREATE", True)
    db = tmp_path / "food_ordering.db"

    def _run(*argv, answers=()):
        out = io.StringIO()
        pending = list(answers)
        prompt = lambda question: pending.pop(0) if pending else ""
        code = cli.main(["--db", str(db), *argv], prompt=prompt, out=out)
        return code, out.getvalue()

    return _run


def test_food_list_shows_seed_menu(run):
    code, output = run("food", "list")
    assert code == 0
    assert len(output.strip().splitlines()) == len(SEED_FOOD_ITEMS)
    assert "Margherita Pizza" in output


def test_food_add_and_search(run):
    code, output = run("food", "add", "Veggie Wrap", "6.50")
    assert code == 0
    assert 'Added "Veggie Wrap" successfully!' in output
    code, output = run("food", "search", "wrap")
    assert "Veggie Wrap" in output and "$6.50" in output


def test_food_add_invalid_cost_fails(run):
    code, output = run("food", "add", "Soup", "-3")
    assert code == 1
    assert output.startswith("Error: cost:")


def test_food_delete_asks_first(run):
    code, output = run("food", "delete", "16", answers=["n"])
    assert code == 0 and "Cancelled." in output
    code, output = run("food", "delete", "16", answers=["y"])
    assert 'Deleted "Soda".' in output
    assert "Soda" not in run("food", "list")[1]


def test_plan_create_skips_items_over_budget(run):
    # 1 = Margherita Pizza 12.99, 2 = Caesar Salad 8.50, 16 = Soda 2.00
    code, output = run("plan", "create", "--budget", "15", "--date", "2025-11-25", "1", "2", "16")
    assert code == 0
    assert 'Skipped "Caesar Salad": Adding this item would exceed your budget' in output
    assert "Order plan saved for 2025-11-25!" in output
    assert "Remaining:     $0.01" in output

    code, output = run("plan", "show", "2025-11-25")
    assert "Margherita Pizza" in output and "Soda" in output and "Caesar Salad" not in output


def test_plan_create_replacement_needs_confirmation(run):
    run("plan", "create", "--budget", "10", "--date", "2025-12-01", "2")
    code, output = run("plan", "create", "--budget", "5", "--date", "2025-12-01", "16", answers=["no"])
    assert "the existing plan was kept" in output
    assert "Caesar Salad" in run("plan", "show", "2025-12-01")[1]

    code, output = run("plan", "create", "--budget", "5", "--date", "2025-12-01", "--yes", "16")
    assert code == 0
    shown = run("plan", "show", "2025-12-01")[1]
    assert "Soda" in shown and "Caesar Salad" not in shown


def test_plan_create_without_affordable_items_is_refused(run):
    code, output = run("plan", "create", "--budget", "1", "--date", "2025-11-25", "1")
    assert code == 1
    assert "Please select at least one food item" in output
    assert run("plan", "dates")[1].strip() == "No order plans yet."


def test_plan_show_pdf_and_delete(run, tmp_path):
    run("plan", "create", "--budget", "20", "--date", "2025-11-25", "1", "16")
    pdf = tmp_path / "plan.pdf"
    code, output = run("plan", "show", "2025-11-25", "--pdf", str(pdf))
    assert code == 0
    assert pdf.read_bytes().startswith(b"%PDF")

    code, output = run("plan", "delete", "2025-11-25", "--yes")
    assert "Deleted 2 entries for 2025-11-25." in output
    code, output = run("plan", "delete", "2099-01-01", "--yes")
    assert "Deleted 0 entries for 2099-01-01." in output
    assert run("plan", "show", "2025-11-25")[0] == 1


def test_summary(run):
    run("plan", "create", "--budget", "20", "--date", "2025-11-25", "1")
    run("plan", "create", "--budget", "20", "--date", "2025-11-26", "2")
    code, output = run("summary")
    assert f"Food items: {len(SEED_FOOD_ITEMS)}" in output
    assert "Order dates: 2" in output


def test_export_and_import_catalog(run, tmp_path):
    target = tmp_path / "catalog.json"
    code, _ = run("export", "catalog", "--file", str(target))
    assert code == 0
    assert len(json.loads(target.read_text(encoding="utf-8"))) == len(SEED_FOOD_ITEMS)

    code, output = run("export", "plans", "--format", "csv")
    assert code == 1

    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps([{"name": "Soda", "cost": 2}, {"name": "Bagel", "cost": 2.5}]), encoding="utf-8")
    code, output = run("import", "catalog", str(extra))
    assert "Imported 1 food items" in output
