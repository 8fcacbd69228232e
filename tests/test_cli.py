import json

import pytest

from itemdb import cli

from .conftest import JACKET_BYTES, SHIRT_BYTES, canonical_name


@pytest.fixture(params=["sqlite", "json"])
def run(request, tmp_path, monkeypatch):
    """Run the CLI against a temporary catalog for each backend."""
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    base = [
        "--backend", request.param,
        "--database", str(tmp_path / "items.sqlite3"),
        "--document", str(tmp_path / "items.json"),
        "--images", str(tmp_path / "images"),
    ]

    def _run(*args):
        cli.main(base + list(args))

    return _run


def test_add_then_list_json(run, write_image, capsys):
    run("add", "jacket", "fashion", str(write_image(JACKET_BYTES)))
    capsys.readouterr()

    run("list", "--json")

    assert json.loads(capsys.readouterr().out) == {
        "items": [{"name": "jacket", "category": "fashion", "image": canonical_name(JACKET_BYTES)}]
    }


def test_list_empty(run, capsys):
    run("list")

    assert "Catalog is empty" in capsys.readouterr().out


def test_show_and_search(run, write_image, capsys):
    run("add", "jacket", "fashion", str(write_image(JACKET_BYTES, "a.jpg")))
    run("add", "ball", "toys", str(write_image(SHIRT_BYTES, "b.jpg")))
    capsys.readouterr()

    run("show", "1")
    assert "Name:     ball" in capsys.readouterr().out

    run("search", "fashion")
    out = capsys.readouterr().out
    assert "jacket" in out
    assert "ball" not in out
    assert "Total: 1 item(s)" in out


def test_categories(run, write_image, capsys):
    run("add", "jacket", "fashion", str(write_image(JACKET_BYTES, "a.jpg")))
    run("add", "shirt", "fashion", str(write_image(SHIRT_BYTES, "b.jpg")))
    capsys.readouterr()

    run("categories")

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].split() == ["1", "fashion"]


def test_show_out_of_range_exits_with_error(run, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run("show", "3")

    assert excinfo.value.code == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_add_missing_image_exits_with_error(run, tmp_path, capsys):
    with pytest.raises(SystemExit):
        run("add", "jacket", "fashion", str(tmp_path / "nope.jpg"))

    assert "Image not found" in capsys.readouterr().out


def test_import_yaml(run, tmp_path, capsys):
    (tmp_path / "jacket.jpg").write_bytes(JACKET_BYTES)
    (tmp_path / "shirt.jpg").write_bytes(SHIRT_BYTES)
    manifest = tmp_path / "items.yaml"
    manifest.write_text(
        "items:\n"
        "  - {name: jacket, category: fashion, image: jacket.jpg}\n"
        "  - {name: shirt, category: fashion, image: shirt.jpg}\n"
        "  - {name: ghost, category: fashion, image: missing.jpg}\n"
        "  - {name: nameless}\n"
    )

    run("import", str(manifest))

    out = capsys.readouterr().out
    assert "Imported 2 item(s), 2 failure(s). Total in catalog: 2" in out


def test_import_requires_items_list(run, tmp_path, capsys):
    manifest = tmp_path / "items.yaml"
    manifest.write_text("things: []\n")

    with pytest.raises(SystemExit):
        run("import", str(manifest))

    assert "items" in capsys.readouterr().out


def test_import_missing_file_exits_with_error(run, tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run("import", str(tmp_path / "nope.yaml"))

    assert excinfo.value.code == 1
    assert capsys.readouterr().out.startswith("Error: Could not read")


def test_import_invalid_yaml_exits_with_error(run, tmp_path, capsys):
    manifest = tmp_path / "items.yaml"
    manifest.write_text("items: [unclosed\n")

    with pytest.raises(SystemExit) as excinfo:
        run("import", str(manifest))

    assert excinfo.value.code == 1
    assert "Invalid YAML" in capsys.readouterr().out


def test_unknown_backend_from_environment(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setenv("ITEMDB_BACKEND", "postgres")

    with pytest.raises(SystemExit):
        cli.main(["--images", str(tmp_path / "images"), "list"])

    assert "Unknown backend" in capsys.readouterr().out
