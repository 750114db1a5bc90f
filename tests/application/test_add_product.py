"""Integration tests for the Add Product use case."""

from decimal import Decimal

import pytest

from jewelry.application.add_material import AddMaterialHandler
from jewelry.application.add_product import AddProductHandler
from jewelry.application.dto import (
    GemstoneLineSpec,
    MetalLineSpec,
    OtherChargeSpec,
    VariantSpec,
)
from jewelry.domain.exceptions import NotFoundError, ValidationError
from tests.fakes import FakeMaterialRepository, FakeProductRepository

D = Decimal


def _setup():
    material_repo = FakeMaterialRepository()
    product_repo = FakeProductRepository()
    add_material = AddMaterialHandler(material_repo)
    add_material.handle("metal", "Gold", [VariantSpec("22K", "6000", purity="91.6")])
    add_material.handle("gemstone", "Diamond", [VariantSpec("VVS1", "40000")])
    return product_repo, material_repo


class TestAddProduct:

    def test_prices_computed_from_composition(self):
        product_repo, material_repo = _setup()
        dto = AddProductHandler(product_repo, material_repo).handle(
            "Ring", metals=[MetalLineSpec("1", "1", "10")], making="10%"
        )

        assert dto.id == "1"
        assert dto.product_code == "AJ-0001"
        assert dto.prices["metal_total"] == D("60000.00")
        assert dto.prices["making_charge_amount"] == D("6000.00")
        assert dto.prices["gst_amount"] == D("1980.00")
        assert dto.total_price == D("67980.00")
        assert dto.gst_percentage == D("3")
        assert product_repo.get_by_id("1").last_price_sync is not None

    def test_lines_copy_variant_name_and_price(self):
        product_repo, material_repo = _setup()
        AddProductHandler(product_repo, material_repo).handle(
            "Ring", metals=[MetalLineSpec("1", "1", "2.5")]
        )
        line = product_repo.get_by_id("1").metal_composition[0]
        assert line.variant_name == "22K"
        assert line.price_per_gram == D("6000")
        assert line.metal.name == "Gold"
        assert line.material_id == "1"

    def test_per_line_wastage_overrides_global_wastage(self):
        product_repo, material_repo = _setup()
        dto = AddProductHandler(product_repo, material_repo).handle(
            "Earrings",
            metals=[MetalLineSpec("1", "1", "2", wastage="8%", price="6100")],
            gemstones=[GemstoneLineSpec("2", "1", "0.25", quantity=2)],
            making="12%",
            wastage="500",
            others=[OtherChargeSpec("Hallmark", "45")],
        )

        assert dto.per_line_wastage is True
        assert dto.prices == {
            "metal_total": D("12200.00"),
            "gemstone_total": D("20000.00"),
            "making_charge_amount": D("1464.00"),
            "wastage_charge_amount": D("976.00"),
            "other_charges_total": D("45.00"),
            "subtotal": D("34685.00"),
            "gst_amount": D("1040.55"),
            "total_price": D("35725.55"),
        }

    def test_codes_follow_ids_and_prefix(self):
        product_repo, material_repo = _setup()
        handler = AddProductHandler(product_repo, material_repo, code_prefix="GJ")
        handler.handle("A", metals=[MetalLineSpec("1", "1", "1")])
        second = handler.handle("B", metals=[MetalLineSpec("1", "1", "1")])
        assert second.product_code == "GJ-0002"

    def test_explicit_code_must_be_unique(self):
        product_repo, material_repo = _setup()
        handler = AddProductHandler(product_repo, material_repo)
        handler.handle("A", product_code="RING-1")
        with pytest.raises(ValidationError, match="Product code 'RING-1' already exists"):
            handler.handle("B", product_code="RING-1")

    def test_default_gst_is_configurable(self):
        product_repo, material_repo = _setup()
        dto = AddProductHandler(product_repo, material_repo, default_gst=D("5")).handle(
            "Ring", metals=[MetalLineSpec("1", "1", "1")]
        )
        assert dto.total_price == D("6300.00")

    def test_unknown_variant_rejected(self):
        product_repo, material_repo = _setup()
        with pytest.raises(NotFoundError, match="Variant '9' not found in metal 'Gold'"):
            AddProductHandler(product_repo, material_repo).handle(
                "Ring", metals=[MetalLineSpec("1", "9", "1")]
            )
        assert product_repo.list_all() == []

    def test_gemstone_used_as_metal_rejected(self):
        product_repo, material_repo = _setup()
        with pytest.raises(NotFoundError, match="Metal '2' not found"):
            AddProductHandler(product_repo, material_repo).handle(
                "Ring", metals=[MetalLineSpec("2", "1", "1")]
            )

    def test_invalid_gst_rejected(self):
        product_repo, material_repo = _setup()
        with pytest.raises(ValidationError, match="between 0 and 100"):
            AddProductHandler(product_repo, material_repo).handle("Ring", gst="120")

    def test_blank_name_rejected(self):
        product_repo, material_repo = _setup()
        with pytest.raises(ValidationError, match="Product name is required"):
            AddProductHandler(product_repo, material_repo).handle("  ")

    def test_weight_over_limit_rejected(self):
        product_repo, material_repo = _setup()
        with pytest.raises(ValidationError, match="weight in grams cannot exceed"):
            AddProductHandler(product_repo, material_repo).handle(
                "Ingot", metals=[MetalLineSpec("1", "1", "1e20")]
            )
        assert product_repo.list_all() == []
