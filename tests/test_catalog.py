from __future__ import annotations

import json
import plistlib
from pathlib import Path

import pytest

from whatword.game.catalog import CategoryCatalog, CompoundCategory, SimpleCategory, load, load_default
from whatword.game.errors import LoadError


def test_load_mapping_keeps_order_and_decodes_compound_keys() -> None:
    catalog = load({"Animals": "ABC", "Fruit$Vegetable": "XY"})

    assert catalog.entries() == [("Animals", "ABC"), ("Fruit$Vegetable", "XY")]
    animals, produce = catalog.categories()
    assert animals == SimpleCategory(name="Animals", letters="ABC")
    assert produce == CompoundCategory(name_a="Fruit", name_b="Vegetable", letters="XY")
    assert produce.key == "Fruit$Vegetable"
    assert produce.display_lines == ("FRUIT", "VEGETABLE")
    assert animals.display_lines == ("ANIMALS",)


def test_load_normalizes_letter_pools() -> None:
    catalog = load({"Animals": "a b\tc"})
    assert catalog.letter_pool("Animals") == "ABC"


def test_load_json_file(tmp_path: Path) -> None:
    p = tmp_path / "categories.json"
    p.write_text(json.dumps({"Sports": "BCF", "Things in a$Kitchen": "KS"}), encoding="utf-8")

    catalog = load(p)
    assert len(catalog) == 2
    assert "Sports" in catalog
    assert catalog.category("Things in a$Kitchen").display_lines == ("THINGS IN A", "KITCHEN")


def test_load_plist_file(tmp_path: Path) -> None:
    p = tmp_path / "Categories.plist"
    p.write_bytes(plistlib.dumps({"Colours": "BGR"}))

    catalog = load(str(p))
    assert catalog.entries() == [("Colours", "BGR")]


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(LoadError) as exc:
        load(tmp_path / "nope.json")
    assert "not found" in str(exc.value)


@pytest.mark.parametrize(
    "payload",
    [
        "[]",
        '"Animals"',
        '{"Animals": 3}',
        '{"Animals": ["A", "B"]}',
        "{}",
        '{"Animals": "   "}',
        '{"$Vegetable": "AB"}',
        '{"Animals": "AB", "Animals": "CD"}',
        "{not json",
    ],
)
def test_load_rejects_malformed_json(tmp_path: Path, payload: str) -> None:
    p = tmp_path / "bad.json"
    p.write_text(payload, encoding="utf-8")
    with pytest.raises(LoadError):
        load(p)


def test_load_rejects_garbage_plist(tmp_path: Path) -> None:
    p = tmp_path / "bad.plist"
    p.write_bytes(b"definitely not a plist")
    with pytest.raises(LoadError):
        load(p)


def test_load_rejects_non_string_keys() -> None:
    with pytest.raises(LoadError):
        load({1: "ABC"})  # type: ignore[dict-item]


def test_catalog_is_read_only() -> None:
    catalog = load({"Animals": "ABC"})
    entries = catalog.entries()
    entries.append(("Hacked", "Z"))
    assert catalog.entries() == [("Animals", "ABC")]
    assert not hasattr(catalog, "add")
    with pytest.raises(KeyError):
        catalog.category("Hacked")


def test_catalog_constructor_validates_rows() -> None:
    with pytest.raises(LoadError):
        CategoryCatalog({})


@pytest.mark.parametrize("key", ["A$B$C", "Fruit$$Vegetable", "$Fruit$"])
def test_load_rejects_keys_with_extra_delimiters(key: str) -> None:
    with pytest.raises(LoadError) as exc:
        load({"Animals": "ABC", key: "X"})
    assert key in str(exc.value)


def test_bundled_catalog_loads() -> None:
    catalog = load_default()
    assert len(catalog) >= 10
    assert any(isinstance(c, CompoundCategory) for c in catalog.categories())
    for key, pool in catalog.entries():
        assert pool, key
