"""Unit tests for the PriceSynchronizationService."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from jewelry.domain.exceptions import NotFoundError, ValidationError
from jewelry.domain.model.composition import GemstoneLine, MaterialSummary, MetalLine
from jewelry.domain.model.material import (
    GemstoneVariant,
    Material,
    MaterialKind,
    MetalVariant,
)
from jewelry.domain.model.product import Product
from jewelry.domain.model.value_objects import Charge
from jewelry.domain.service.price_calculator import compute_product_price
from jewelry.domain.service.price_synchronization_service import (
    PriceSynchronizationService,
)
from tests.fakes import (
    FakeMaterialRepository,
    FakePriceHistoryRepository,
    FakeProductRepository,
    FlakyProductRepository,
)

D = Decimal
NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def _materials() -> list[Material]:
    gold = Material.create(
        "1",
        MaterialKind.METAL,
        "Gold",
        [
            MetalVariant(id="1", name="22K", purity=D("91.6"), price_per_gram=D("6000")),
            MetalVariant(id="2", name="18K", purity=D("75"), price_per_gram=D("5000")),
        ],
    )
    diamond = Material.create(
        "2",
        MaterialKind.GEMSTONE,
        "Diamond",
        [GemstoneVariant(id="1", name="VVS1", price_per_carat=D("40000"))],
    )
    return [gold, diamond]


def _priced(product: Product) -> Product:
    product.apply_prices(compute_product_price(product.pricing_input()).breakdown)
    return product


def _products() -> list[Product]:
    # 10g 22K, 10% making: 60000 + 6000 -> 66000 + 3% GST = 67980
    ring = Product.create(
        "1", "Ring", "AJ-0001",
        [MetalLine(MaterialSummary("1", "Gold"), "1", "22K", D("10"), D("6000"))],
        [],
        Charge.percentage("10"), None, D("3"), [],
    )
    # 5g 22K (bare ref) + 2 x 0.5ct VVS1, ₹500 making: 70500 + 2115 = 72615
    pendant = Product.create(
        "2", "Pendant", "AJ-0002",
        [MetalLine("1", "1", "22K", D("5"), D("6000"))],
        [GemstoneLine("2", "1", "VVS1", D("0.5"), 2, D("40000"))],
        Charge.fixed("500"), None, D("3"), [],
    )
    # 4g 18K: 20000 + 600 = 20600
    band = Product.create(
        "3", "Band", "AJ-0003",
        [MetalLine("1", "2", "18K", D("4"), D("5000"))],
        [],
        Charge.none(), None, D("3"), [],
    )
    return [_priced(ring), _priced(pendant), _priced(band)]


def _service(product_repo=None):
    material_repo = FakeMaterialRepository(_materials())
    product_repo = product_repo or FakeProductRepository(_products())
    history_repo = FakePriceHistoryRepository()
    service = PriceSynchronizationService(
        material_repo, product_repo, history_repo, clock=lambda: NOW
    )
    return service, material_repo, product_repo, history_repo


# ── Lookup ───────────────────────────────────────────────────────────────────


class TestLocate:

    def test_captures_old_price_and_unit(self):
        service, *_ = _service()
        target = service.locate(MaterialKind.METAL, "1", "1")
        assert target.old_price == D("6000")
        assert target.unit == "gram"
        assert target.variant.name == "22K"

    def test_unknown_material(self):
        service, *_ = _service()
        with pytest.raises(NotFoundError, match="Metal '9' not found"):
            service.locate(MaterialKind.METAL, "9", "1")

    def test_kind_mismatch_is_not_found(self):
        service, *_ = _service()
        with pytest.raises(NotFoundError, match="Gemstone '1' not found"):
            service.locate(MaterialKind.GEMSTONE, "1", "1")

    def test_unknown_variant(self):
        service, *_ = _service()
        with pytest.raises(NotFoundError, match="Variant '7' not found in metal 'Gold'"):
            service.locate(MaterialKind.METAL, "1", "7")

    def test_affected_products_match_both_reference_shapes(self):
        service, *_ = _service()
        target = service.locate(MaterialKind.METAL, "1", "1")
        assert sorted(p.id for p in service.affected_products(target)) == ["1", "2"]


# ── Synchronize ──────────────────────────────────────────────────────────────


class TestSynchronize:

    def test_updates_variant_and_every_affected_product(self):
        service, material_repo, product_repo, _ = _service()
        target = service.locate(MaterialKind.METAL, "1", "1")

        outcome = service.synchronize(target, D("6500"))

        variant = material_repo.get_by_id("1").find_variant("1")
        assert variant.price_per_gram == D("6500")
        assert variant.last_updated == NOW
        assert outcome.synced_count == 2
        assert outcome.failed_product_ids == []

        ring = product_repo.get_by_id("1")
        assert ring.metal_composition[0].price_per_gram == D("6500")
        assert ring.total_price == D("73645.00")
        assert ring.last_price_sync == NOW
        assert product_repo.get_by_id("2").total_price == D("75190.00")
        assert product_repo.get_by_id("3").total_price == D("20600.00")
        assert sorted(product_repo.saved_ids) == ["1", "2"]

    def test_stored_prices_equal_fresh_calculation(self):
        service, _, product_repo, _ = _service()
        service.synchronize(service.locate(MaterialKind.METAL, "1", "1"), D("6123.45"))
        for product in product_repo.list_all():
            fresh = compute_product_price(product.pricing_input()).breakdown
            assert product.prices == fresh

    def test_appends_one_history_entry(self):
        service, _, _, history_repo = _service()
        service.synchronize(service.locate(MaterialKind.METAL, "1", "1"), D("6500"))

        assert len(history_repo.entries) == 1
        entry = history_repo.entries[0]
        assert entry.entity_type is MaterialKind.METAL
        assert entry.entity_id == "1"
        assert entry.entity_name == "Gold"
        assert entry.variant_name == "Gold 22K"
        assert entry.old_price == D("6000")
        assert entry.new_price == D("6500")
        assert entry.unit == "gram"
        assert entry.affected_products == 2
        assert entry.created_at == NOW

    def test_unused_variant_still_records_history(self):
        service, material_repo, _, history_repo = _service()
        material_repo.get_by_id("1").variants.append(
            MetalVariant(id="3", name="14K", purity=D("58.5"), price_per_gram=D("3900"))
        )
        outcome = service.synchronize(service.locate(MaterialKind.METAL, "1", "3"), D("4000"))
        assert outcome.synced_count == 0
        assert history_repo.entries[0].affected_products == 0

    def test_gemstone_sync(self):
        service, _, product_repo, history_repo = _service()
        service.synchronize(service.locate(MaterialKind.GEMSTONE, "2", "1"), D("50000"))
        # 30000 + 50000 + 500 = 80500 + 2415
        assert product_repo.get_by_id("2").total_price == D("82915.00")
        assert history_repo.entries[0].unit == "carat"

    def test_same_price_twice_is_idempotent_but_logged_twice(self):
        service, _, product_repo, history_repo = _service()
        service.synchronize(service.locate(MaterialKind.METAL, "1", "1"), D("6500"))
        second = service.synchronize(service.locate(MaterialKind.METAL, "1", "1"), D("6500"))

        assert product_repo.get_by_id("1").total_price == D("73645.00")
        assert all(o.impact.price_difference == D("0.00") for o in second.outcomes)
        assert len(history_repo.entries) == 2
        assert history_repo.entries[1].old_price == D("6500")

    def test_zero_price_is_allowed(self):
        service, _, product_repo, _ = _service()
        service.synchronize(service.locate(MaterialKind.METAL, "1", "2"), D("0"))
        assert product_repo.get_by_id("3").total_price == D("0.00")

    def test_failed_save_is_reported_not_raised(self):
        flaky = FlakyProductRepository(_products(), failing_ids={"2"})
        service, material_repo, _, history_repo = _service(product_repo=flaky)

        outcome = service.synchronize(service.locate(MaterialKind.METAL, "1", "1"), D("6500"))

        assert outcome.synced_count == 1
        assert outcome.failed_product_ids == ["2"]
        assert "write failed" in [o for o in outcome.outcomes if not o.ok][0].error
        assert flaky.saved_ids == ["1"]
        assert material_repo.get_by_id("1").find_variant("1").price_per_gram == D("6500")
        assert history_repo.entries[0].affected_products == 1

    def test_negative_price_rejected_before_anything_is_saved(self):
        service, material_repo, product_repo, history_repo = _service()
        target = service.locate(MaterialKind.METAL, "1", "1")
        with pytest.raises(ValidationError):
            service.synchronize(target, D("-1"))
        assert material_repo.save_count == 0
        assert product_repo.saved_ids == []
        assert history_repo.entries == []


# ── Preview ──────────────────────────────────────────────────────────────────


class TestPreview:

    def test_reports_deltas_without_persisting(self):
        service, material_repo, product_repo, history_repo = _service()
        target = service.locate(MaterialKind.METAL, "1", "1")

        impacts = {i.product_id: i for i in service.preview(target, D("6500"))}

        assert impacts["1"].old_total_price == D("67980.00")
        assert impacts["1"].new_total_price == D("73645.00")
        assert impacts["1"].price_difference == D("5665.00")
        assert impacts["2"].price_difference == D("2575.00")
        assert "3" not in impacts

        assert material_repo.get_by_id("1").find_variant("1").price_per_gram == D("6000")
        assert product_repo.get_by_id("1").metal_composition[0].price_per_gram == D("6000")
        assert product_repo.get_by_id("1").total_price == D("67980.00")
        assert material_repo.save_count == 0
        assert product_repo.saved_ids == []
        assert history_repo.entries == []

    def test_matches_what_a_commit_applies(self):
        preview_service, *_ = _service()
        commit_service, *_ = _service()
        previewed = preview_service.preview(
            preview_service.locate(MaterialKind.METAL, "1", "1"), D("6789.01")
        )
        committed = commit_service.synchronize(
            commit_service.locate(MaterialKind.METAL, "1", "1"), D("6789.01")
        )
        assert sorted(previewed, key=lambda i: i.product_id) == sorted(
            (o.impact for o in committed.outcomes), key=lambda i: i.product_id
        )

    def test_unchanged_price_lists_products_with_zero_delta(self):
        service, *_ = _service()
        impacts = service.preview(service.locate(MaterialKind.METAL, "1", "1"), D("6000"))
        assert len(impacts) == 2
        assert all(i.price_difference == D("0.00") for i in impacts)
