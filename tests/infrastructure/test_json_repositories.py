"""Round-trip tests for the JSON file repositories."""

import json
from datetime import datetime, timezone
from decimal import Decimal

from jewelry.domain.model.composition import GemstoneLine, MaterialSummary, MetalLine
from jewelry.domain.model.material import (
    GemstoneVariant,
    Material,
    MaterialKind,
    MetalVariant,
)
from jewelry.domain.model.price_history import PriceHistoryEntry
from jewelry.domain.model.product import Product
from jewelry.domain.model.value_objects import Charge, OtherCharge
from jewelry.domain.service.price_calculator import compute_product_price
from jewelry.infrastructure.persistence.json_material_repository import (
    JsonMaterialRepository,
)
from jewelry.infrastructure.persistence.json_price_history_repository import (
    JsonPriceHistoryRepository,
)
from jewelry.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

D = Decimal


def _product(product_id="1", metal_ref="1") -> Product:
    product = Product.create(
        product_id, "Pendant", f"AJ-000{product_id}",
        [MetalLine(metal_ref, "1", "22K", D("5.125"), D("6000.50"), Charge.percentage("8"))],
        [GemstoneLine(MaterialSummary("2", "Diamond"), "1", "VVS1", D("0.25"), 3, D("40000"))],
        Charge.fixed("500"), None, D("3"), [OtherCharge.of("Hallmark", "45")],
    )
    product.apply_prices(
        compute_product_price(product.pricing_input()).breakdown,
        datetime(2026, 10, 18, tzinfo=timezone.utc),
    )
    return product


class TestJsonMaterialRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "materials.json"
        repo = JsonMaterialRepository(path)
        assert path.read_text(encoding="utf-8") == "[]"
        assert repo.next_id() == "1"

    def test_round_trip_and_upsert(self, tmp_path):
        repo = JsonMaterialRepository(tmp_path / "materials.json")
        gold = Material.create(
            "1", MaterialKind.METAL, "Gold",
            [MetalVariant(id="1", name="22K", purity=D("91.6"), price_per_gram=D("6200.75"))],
        )
        ruby = Material.create(
            "2", MaterialKind.GEMSTONE, "Ruby",
            [GemstoneVariant(id="1", name="AA", price_per_carat=D("9000"), cut="Oval", unit="ratti")],
        )
        repo.save(gold)
        repo.save(ruby)

        gold.find_variant("1").update_price(D("6300"))
        repo.save(gold)

        loaded = repo.get_by_id("1")
        assert len(repo.list_all()) == 2
        assert loaded.find_variant("1").price_per_gram == D("6300")
        assert loaded.find_variant("1").purity == D("91.6")
        assert repo.get_by_name(MaterialKind.GEMSTONE, "ruby").find_variant("1").unit == "ratti"
        assert repo.get_by_name(MaterialKind.METAL, "ruby") is None
        assert [m.name for m in repo.list_all(MaterialKind.METAL)] == ["Gold"]
        assert repo.next_id() == "3"


class TestJsonProductRepository:

    def test_round_trip_preserves_pricing_inputs(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        original = _product()
        repo.save(original)

        loaded = repo.get_by_id("1")
        assert loaded.metal_composition == original.metal_composition
        assert loaded.gemstone_composition == original.gemstone_composition
        assert loaded.making_charges == Charge.fixed("500")
        assert loaded.wastage_charges is None
        assert loaded.other_charges == original.other_charges
        assert loaded.prices == original.prices
        assert loaded.last_price_sync == original.last_price_sync
        assert repo.get_by_code("AJ-0001").id == "1"

    def test_amounts_stored_as_strings(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(_product())
        raw = json.loads(path.read_text(encoding="utf-8"))[0]
        assert raw["metal_composition"][0]["price_per_gram"] == "6000.50"
        assert raw["metal_composition"][0]["metal"] == "1"
        assert raw["gemstone_composition"][0]["gemstone"] == {"id": "2", "name": "Diamond"}
        assert raw["prices"]["total_price"] == str(_product().total_price)

    def test_find_by_variant(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product("1", metal_ref="1"))
        repo.save(_product("2", metal_ref=MaterialSummary("1", "Gold")))
        repo.save(_product("3", metal_ref="7"))

        ids = [p.id for p in repo.find_by_variant(MaterialKind.METAL, "1", "1")]
        assert ids == ["1", "2"]
        assert len(repo.find_by_variant(MaterialKind.GEMSTONE, "2", "1")) == 3
        assert repo.find_by_variant(MaterialKind.GEMSTONE, "1", "1") == []


class TestJsonPriceHistoryRepository:

    def _entry(self, entity_id="1", kind=MaterialKind.METAL, hour=0):
        return PriceHistoryEntry(
            entity_type=kind,
            entity_id=entity_id,
            entity_name="Gold",
            variant_name="Gold 22K",
            old_price=D("6000"),
            new_price=D("6100.50"),
            unit="gram",
            affected_products=3,
            created_at=datetime(2026, 10, 18, hour, tzinfo=timezone.utc),
        )

    def test_append_assigns_ids(self, tmp_path):
        repo = JsonPriceHistoryRepository(tmp_path / "price_history.json")
        first = repo.append(self._entry())
        second = repo.append(self._entry())
        assert (first.id, second.id) == ("1", "2")
        assert repo.list_recent()[0] == second

    def test_newest_first_with_filters(self, tmp_path):
        repo = JsonPriceHistoryRepository(tmp_path / "price_history.json")
        repo.append(self._entry(hour=3))
        repo.append(self._entry(hour=1))
        repo.append(self._entry(entity_id="2", kind=MaterialKind.GEMSTONE, hour=2))

        assert [e.created_at.hour for e in repo.list_recent()] == [3, 2, 1]
        assert [e.created_at.hour for e in repo.list_recent(limit=1)] == [3]
        assert [e.entity_id for e in repo.list_recent(entity_type=MaterialKind.GEMSTONE)] == ["2"]
        assert len(repo.list_recent(entity_id="1")) == 2
