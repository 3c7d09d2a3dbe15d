import pandas as pd


def test_import_then_list_categories(app, tmp_path):
    csv_path = tmp_path / "products.csv"
    pd.DataFrame([
        {"product_id": "P1", "product_name": "Cable", "category": "Computers|Peripherals|Cables"},
        {"product_id": "P2", "product_name": "Broken", "category": " | "},
    ]).to_csv(csv_path, index=False)

    runner = app.test_cli_runner()
    result = runner.invoke(args=["import-products", str(csv_path), "--workers", "2"])
    assert result.exit_code == 0, result.output
    assert "1 Produkte importiert, 3 neue Kategorien." in result.output
    assert "übersprungen Zeile 3" in result.output

    result = runner.invoke(args=["categories"])
    assert result.exit_code == 0
    lines = [l.strip().split(None, 1)[1] for l in result.output.strip().splitlines()]
    assert lines == ["Computers", "Computers > Peripherals", "Computers > Peripherals > Cables"]


def test_import_rejects_csv_without_required_columns(app, tmp_path):
    csv_path = tmp_path / "bad.csv"
    pd.DataFrame([{"sku": "1"}]).to_csv(csv_path, index=False)

    result = app.test_cli_runner().invoke(args=["import-products", str(csv_path)])
    assert result.exit_code != 0
    assert "missing required columns" in result.output


def test_init_db_is_idempotent(app):
    runner = app.test_cli_runner()
    assert runner.invoke(args=["init-db"]).exit_code == 0
    assert runner.invoke(args=["init-db"]).exit_code == 0


def test_commands_close_the_database(app, monkeypatch):
    database = app.extensions["catalog_db"]
    closed = []
    original_close = database.close
    monkeypatch.setattr(database, "close", lambda: (closed.append(True), original_close()))

    runner = app.test_cli_runner()
    assert runner.invoke(args=["init-db"]).exit_code == 0
    assert runner.invoke(args=["categories"]).exit_code == 0
    assert closed == [True, True]
