"""
Unit tests for value objects.
"""

import dataclasses
from decimal import Decimal

import pytest

from src.domain.exceptions.validation_error import ValidationError
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.environmental_flags import EnvironmentalFlags
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.location import Coordinates, LocationReference
from src.domain.value_objects.money import to_minor_units, to_money, to_whole_units
from src.domain.value_objects.proposal_details import (
    CustomService,
    ProposalInputs,
    ProposalTotals,
)
from src.domain.value_objects.proposal_status import ProposalStatus
from src.domain.value_objects.quote_request import QUOTE_DEFAULTS, QuoteRequest
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import (
    PropertyType,
    TerrainType,
    VegetationDensity,
)
from src.domain.value_objects.urgency_level import UrgencyLevel


class TestProposalStatus:
    """Test ProposalStatus value object."""

    def test_enum_values(self):
        """Test that all expected enum values exist."""
        expected_values = [
            "draft",
            "sent",
            "viewed",
            "accepted",
            "paid",
            "expired",
            "cancelled",
        ]
        actual_values = [status.value for status in ProposalStatus]
        assert actual_values == expected_values

    def test_can_accept(self):
        """Only sent and viewed proposals can be accepted."""
        assert ProposalStatus.SENT.can_accept() is True
        assert ProposalStatus.VIEWED.can_accept() is True

        assert ProposalStatus.DRAFT.can_accept() is False
        assert ProposalStatus.ACCEPTED.can_accept() is False
        assert ProposalStatus.PAID.can_accept() is False
        assert ProposalStatus.EXPIRED.can_accept() is False
        assert ProposalStatus.CANCELLED.can_accept() is False

    def test_is_terminal(self):
        """Test is_terminal method for all statuses."""
        # Terminal statuses
        assert ProposalStatus.PAID.is_terminal() is True
        assert ProposalStatus.EXPIRED.is_terminal() is True
        assert ProposalStatus.CANCELLED.is_terminal() is True

        # Non-terminal statuses
        assert ProposalStatus.DRAFT.is_terminal() is False
        assert ProposalStatus.SENT.is_terminal() is False
        assert ProposalStatus.VIEWED.is_terminal() is False
        assert ProposalStatus.ACCEPTED.is_terminal() is False

    def test_terminal_statuses_have_no_targets(self):
        """No transition leaves a terminal status."""
        for status in ProposalStatus:
            if status.is_terminal():
                assert status.allowed_targets() == frozenset()

    def test_accepted_can_only_be_paid_or_cancelled(self):
        """Accepted proposals never expire."""
        assert ProposalStatus.ACCEPTED.allowed_targets() == {
            ProposalStatus.PAID,
            ProposalStatus.CANCELLED,
        }
        assert ProposalStatus.ACCEPTED.can_expire() is False

    def test_string_conversion(self):
        """Test string conversion of enum values."""
        assert ProposalStatus("viewed") == ProposalStatus.VIEWED
        assert ProposalStatus.PAID.value == "paid"


class TestServiceType:
    """Test ServiceType value object."""

    def test_enum_values(self):
        """Test that all expected enum values exist."""
        assert [s.value for s in ServiceType] == [
            "forestry-mulching",
            "land-clearing",
            "stump-grinding",
            "brush-clearing",
        ]

    def test_display_name(self):
        """Display names are title-cased."""
        assert ServiceType.FORESTRY_MULCHING.display_name == "Forestry Mulching"

    def test_stump_grinding_is_not_area_based(self):
        """Stump grinding is priced per stump."""
        assert ServiceType.STUMP_GRINDING.is_area_based is False
        assert ServiceType.LAND_CLEARING.is_area_based is True


class TestMoney:
    """Test money helpers."""

    def test_to_money_rounds_half_up(self):
        """Half cents round away from zero."""
        assert to_money("2.345") == Decimal("2.35")
        assert to_money(Decimal("2.344")) == Decimal("2.34")

    def test_to_money_avoids_float_artifacts(self):
        """Floats are converted through their string form."""
        assert to_money(0.1 + 0.2) == Decimal("0.30")

    def test_to_whole_units(self):
        """Whole unit rounding."""
        assert to_whole_units("367.5") == Decimal("368")

    def test_to_minor_units(self):
        """Amounts convert to integer cents."""
        assert to_minor_units(Decimal("1070.00")) == 107000


class TestLocationReference:
    """Test LocationReference value object."""

    def test_address_reference(self):
        """Test creating an address reference."""
        reference = LocationReference(address="1200 Cypress Hollow Rd")

        assert reference.kind == "address"
        assert reference.describe() == "1200 Cypress Hollow Rd"

    def test_coordinates_reference(self):
        """Test creating a coordinate reference."""
        reference = LocationReference(coordinates=Coordinates(lat=28.5, lng=-81.4))

        assert reference.kind == "coordinates"
        assert reference.describe() == "28.5,-81.4"

    def test_place_id_reference(self):
        """Test creating a place id reference."""
        reference = LocationReference(place_id="ChIJd8BlQ2BZwokRAFUEcm_qrcA")

        assert reference.kind == "place_id"
        assert reference.describe().startswith("place:")

    def test_requires_exactly_one_path(self):
        """Zero or multiple resolution paths are rejected."""
        with pytest.raises(ValidationError):
            LocationReference()

        with pytest.raises(ValidationError) as exc_info:
            LocationReference(
                address="1200 Cypress Hollow Rd",
                coordinates=Coordinates(lat=28.5, lng=-81.4),
            )
        assert exc_info.value.errors[0].field == "location"

    def test_blank_address_alongside_coordinates(self):
        """An empty address field does not count as a second path."""
        reference = LocationReference(
            address="", coordinates=Coordinates(lat=28.5, lng=-81.4)
        )

        assert reference.kind == "coordinates"

    def test_short_address_rejected(self):
        """Addresses shorter than five characters are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            LocationReference(address="abc")

        assert exc_info.value.errors[0].field == "address"

    def test_coordinate_bounds(self):
        """Coordinates outside the globe are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Coordinates(lat=91, lng=181)

        fields = {error.field for error in exc_info.value.errors}
        assert fields == {"coordinates.lat", "coordinates.lng"}


class TestQuoteRequest:
    """Test QuoteRequest value object."""

    @pytest.fixture
    def location(self):
        """Address location reference."""
        return LocationReference(address="1200 Cypress Hollow Rd")

    def test_defaults(self, location):
        """Optional inputs fall back to the documented defaults."""
        request = QuoteRequest(
            location=location,
            service_type=ServiceType.FORESTRY_MULCHING,
            acreage=Decimal("2.5"),
            density=VegetationDensity.MODERATE,
        )

        assert request.terrain == TerrainType.ROLLING
        assert request.accessibility_rating == 7
        assert request.property_type == PropertyType.RESIDENTIAL
        assert request.urgency == UrgencyLevel.STANDARD
        assert request.seasonal_constraints is False
        assert request.environmental == EnvironmentalFlags()
        assert request.options.include_detailed_breakdown is True
        assert request.options.include_alternatives is True
        assert request.options.include_seasonal_pricing is False
        assert request.options.include_financing is False
        assert QUOTE_DEFAULTS.accessibility_rating == 7

    def test_acreage_normalized_to_decimal(self, location):
        """Numeric acreage is stored as Decimal."""
        request = QuoteRequest(
            location=location,
            service_type=ServiceType.LAND_CLEARING,
            acreage="0.1",
            density=VegetationDensity.LIGHT,
        )

        assert request.acreage == Decimal("0.1")

    @pytest.mark.parametrize("acreage", ["0.09", "1000.01", "0", "-1"])
    def test_acreage_out_of_range(self, location, acreage):
        """Acreage must lie within 0.1 and 1000."""
        with pytest.raises(ValidationError) as exc_info:
            QuoteRequest(
                location=location,
                service_type=ServiceType.LAND_CLEARING,
                acreage=acreage,
                density=VegetationDensity.LIGHT,
            )

        assert exc_info.value.errors[0].field == "acreage"

    @pytest.mark.parametrize("rating", [0, 11, 5.5, True])
    def test_accessibility_rating_rejected(self, location, rating):
        """Accessibility must be an integer from 1 to 10."""
        with pytest.raises(ValidationError) as exc_info:
            QuoteRequest(
                location=location,
                service_type=ServiceType.LAND_CLEARING,
                acreage=Decimal("1"),
                density=VegetationDensity.LIGHT,
                accessibility_rating=rating,
            )

        assert exc_info.value.errors[0].field == "accessibility_rating"

    def test_collects_all_field_errors(self, location):
        """Every invalid field is reported at once."""
        with pytest.raises(ValidationError) as exc_info:
            QuoteRequest(
                location=location,
                service_type=ServiceType.LAND_CLEARING,
                acreage=Decimal("5000"),
                density=VegetationDensity.LIGHT,
                accessibility_rating=0,
            )

        fields = [error.field for error in exc_info.value.errors]
        assert fields == ["acreage", "accessibility_rating"]

    def test_is_immutable(self, location):
        """Quote requests are frozen."""
        request = QuoteRequest(
            location=location,
            service_type=ServiceType.LAND_CLEARING,
            acreage=Decimal("1"),
            density=VegetationDensity.LIGHT,
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.acreage = Decimal("2")


class TestCustomer:
    """Test Customer value object."""

    def test_customer_creation(self):
        """Test creating a customer."""
        customer = Customer(name="Dana Whitfield", email="dana@example.com", phone="555")

        assert customer.address is None
        assert Customer.from_dict(customer.to_dict()) == customer

    def test_invalid_customer(self):
        """Missing name and malformed email are reported together."""
        with pytest.raises(ValidationError) as exc_info:
            Customer(name=" ", email="not-an-email", phone="555")

        fields = [error.field for error in exc_info.value.errors]
        assert fields == ["customer.name", "customer.email"]


class TestLineItem:
    """Test LineItem value object."""

    def test_total_defaults_to_quantity_times_rate(self):
        """Total is computed and rounded to cents."""
        item = LineItem(
            service_id="stump-grinding",
            service_name="Stump Grinding",
            quantity=Decimal("3"),
            rate=Decimal("33.333"),
        )

        assert item.rate == Decimal("33.33")
        assert item.total == Decimal("99.99")

    def test_explicit_total_within_rate_rounding(self):
        """A total priced before the rate was rounded is kept as given."""
        item = LineItem(
            service_id="forestry-mulching",
            service_name="Forestry Mulching",
            quantity=Decimal("3"),
            rate=Decimal("33.33"),
            total=Decimal("100.00"),
        )

        assert item.total == Decimal("100.00")

    @pytest.mark.parametrize(
        "total,message",
        [
            (Decimal("-500"), "Total cannot be negative"),
            (Decimal("1.00"), "Total must equal quantity times rate"),
            (Decimal("150.00"), "Total must equal quantity times rate"),
        ],
    )
    def test_explicit_total_must_match(self, total, message):
        """A total that disagrees with quantity times rate is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            LineItem(
                service_id="stump-grinding",
                service_name="Stump Grinding",
                quantity=Decimal("1"),
                rate=Decimal("100"),
                total=total,
            )

        assert [(e.field, e.message) for e in exc_info.value.errors] == [("total", message)]

    def test_explicit_total_is_kept(self):
        """An explicit total equal to quantity times rate is kept."""
        item = LineItem(
            service_id="forestry-mulching",
            service_name="Forestry Mulching",
            quantity=Decimal("2.5"),
            rate=Decimal("3080"),
            total=Decimal("7700"),
        )

        assert item.total == Decimal("7700.00")

    def test_invalid_line_item(self):
        """Non-positive quantity and negative rate are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            LineItem(
                service_id="x",
                service_name="Extra",
                quantity=Decimal("0"),
                rate=Decimal("-1"),
            )

        fields = [error.field for error in exc_info.value.errors]
        assert fields == ["quantity", "rate"]

    def test_dict_round_trip(self):
        """Line items survive JSON storage."""
        item = LineItem(
            service_id="urgency",
            service_name="Expedited Scheduling",
            quantity=Decimal("1"),
            rate=Decimal("1925"),
        )

        assert LineItem.from_dict(item.to_dict()) == item


class TestProposalDetails:
    """Test proposal inputs and totals."""

    def test_inputs_round_trip_with_custom_services(self):
        """Inputs including custom services survive JSON storage."""
        inputs = ProposalInputs(
            acreage="2.5",
            package_id="premium",
            address="1200 Cypress Hollow Rd",
            custom_services=(
                CustomService(
                    name="Haul-off",
                    description="Remove debris piles",
                    quantity=Decimal("2"),
                    rate=Decimal("450"),
                ),
            ),
        )

        restored = ProposalInputs.from_dict(inputs.to_dict())

        assert restored == inputs
        assert restored.acreage == Decimal("2.5")

    def test_inputs_require_positive_acreage(self):
        """Acreage must be positive."""
        with pytest.raises(ValidationError):
            ProposalInputs(acreage=0, package_id="standard", address="Somewhere Rd")

    def test_totals_must_add_up(self):
        """Totals that do not sum are rejected."""
        with pytest.raises(ValueError):
            ProposalTotals(
                subtotal=Decimal("100"),
                tax=Decimal("7"),
                total=Decimal("108"),
                deposit_amount=Decimal("21.6"),
                balance=Decimal("86.4"),
                tax_rate=Decimal("0.07"),
                deposit_rate=Decimal("0.20"),
            )

    def test_zero_deposit_not_required(self):
        """A zero deposit means no payment is owed at acceptance."""
        totals = ProposalTotals(
            subtotal=Decimal("100"),
            tax=Decimal("0"),
            total=Decimal("100"),
            deposit_amount=Decimal("0"),
            balance=Decimal("100"),
            tax_rate=Decimal("0"),
            deposit_rate=Decimal("0"),
        )

        assert totals.deposit_required is False
