"""
Tests for the processing generator.

Process parameters, yield model and consumption figures.
"""

from dataclasses import replace
from datetime import date

import pytest

from oleificio_sim.generators import ProcessingGenerator
from oleificio_sim.generators.processing import (
    base_processing_minutes,
    mixing_duration,
    mixing_modifier,
    yield_cap,
)


class TestMixing:
    """Tests for mixing duration and its yield modifier."""

    def test_reference_humidity_gives_optimum(self):
        assert mixing_duration(70.0) == 35.0

    def test_duration_clamped(self):
        assert mixing_duration(40.0) == 30.0
        assert mixing_duration(95.0) == 45.0

    def test_duration_scales_with_humidity(self):
        assert mixing_duration(80.0) == 40.0

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (35.0, 1.0),
            (40.0, 1.0),
            (30.0, 1.0),
            (29.0, 0.9),
            (46.0, 0.95),
            (42.0, 0.98),
        ],
    )
    def test_modifier(self, duration, expected):
        assert mixing_modifier(duration) == pytest.approx(expected)


class TestParameters:
    """Tests for generate_parameters()."""

    def test_grinding_follows_ambient(self, ctx, make_batch, mild_day):
        params = ProcessingGenerator(ctx).generate_parameters(make_batch(), mild_day)
        assert params.grinding_temperature == 20.0
        assert params.extraction_temperature == 19.0

    def test_grinding_capped_at_cold_extraction_limit(self, ctx, make_batch, mild_day):
        hot = replace(mild_day, temperature=24.5)
        params = ProcessingGenerator(ctx).generate_parameters(make_batch(), hot)
        assert params.grinding_temperature == 27.0
        assert params.extraction_temperature == 26.0

    @pytest.mark.parametrize(
        "quality, low, high",
        [("Premium", 3000, 3400), ("Standard", 3400, 3800)],
    )
    def test_centrifuge_within_tier_band(self, ctx, make_batch, mild_day, quality, low, high):
        generator = ProcessingGenerator(ctx)
        for _ in range(200):
            params = generator.generate_parameters(make_batch(quality=quality), mild_day)
            assert low <= params.centrifugation_speed <= high

    def test_linked_to_batch(self, ctx, make_batch, mild_day):
        batch = make_batch()
        params = ProcessingGenerator(ctx).generate_parameters(batch, mild_day)
        assert params.batch_id == batch.id
        assert params.timestamp == batch.arrival_timestamp


class TestYieldModifiers:
    """Tests for yield_modifiers()."""

    def test_quality_modifier(self, ctx, make_batch, mild_day):
        generator = ProcessingGenerator(ctx)
        params = generator.generate_parameters(make_batch(), mild_day)
        assert generator.yield_modifiers(make_batch(quality="Premium"), params).quality == 1.1
        assert generator.yield_modifiers(make_batch(quality="Standard"), params).quality == 0.9

    def test_temperature_penalty_above_limit(self, ctx, make_batch, mild_day):
        generator = ProcessingGenerator(ctx)
        params = generator.generate_parameters(make_batch(), mild_day)
        assert generator.yield_modifiers(make_batch(), params).temperature == 1.0
        overheated = replace(params, extraction_temperature=28.0)
        assert generator.yield_modifiers(make_batch(), overheated).temperature == 0.9

    def test_total_is_product(self, ctx, make_batch, mild_day):
        generator = ProcessingGenerator(ctx)
        params = replace(
            generator.generate_parameters(make_batch(), mild_day),
            extraction_temperature=28.0,
            mixing_duration=29.0,
        )
        modifiers = generator.yield_modifiers(make_batch(quality="Standard"), params)
        assert modifiers.total == pytest.approx(0.9 * 0.9 * 0.9)


class TestProduction:
    """Tests for calculate_production()."""

    @pytest.mark.parametrize("variety", ["Ogliarola", "Coratina"])
    def test_yield_within_variety_cap(self, ctx, make_batch, mild_day, variety):
        generator = ProcessingGenerator(ctx)
        for _ in range(300):
            _, production = generator.generate_processing_data(make_batch(variety=variety), mild_day)
            assert 0 < production.yield_pct <= yield_cap(variety) <= 16.5

    @pytest.mark.parametrize("variety", ["Ogliarola", "Coratina"])
    def test_premium_yields_vary(self, ctx, make_batch, mild_day, variety):
        generator = ProcessingGenerator(ctx)
        yields = {
            generator.generate_processing_data(make_batch(variety=variety), mild_day)[1].yield_pct
            for _ in range(200)
        }
        assert len(yields) > 10

    @pytest.mark.parametrize("variety", ["Ogliarola", "Coratina"])
    def test_premium_outyields_standard(self, ctx, make_batch, mild_day, variety):
        generator = ProcessingGenerator(ctx)

        def mean_yield(quality):
            batch = make_batch(variety=variety, quality=quality)
            return sum(
                generator.generate_processing_data(batch, mild_day)[1].yield_pct
                for _ in range(200)
            ) / 200

        assert mean_yield("Premium") > mean_yield("Standard")

    def test_mixing_penalty_reaches_yield(self, ctx, make_batch, mild_day):
        generator = ProcessingGenerator(ctx)
        batch = make_batch(variety="Ogliarola", quality="Standard")
        params = generator.generate_parameters(batch, mild_day)
        optimal = generator.calculate_production(batch, params).yield_pct
        short = generator.calculate_production(batch, replace(params, mixing_duration=29.0)).yield_pct
        # Standard Ogliarola: 11.93-12.38 at the optimum, 10.73-11.14 below 30 minutes
        assert short < optimal

    def test_oil_matches_weight_and_yield(self, ctx, make_batch, mild_day):
        generator = ProcessingGenerator(ctx)
        for weight in (500, 777, 1234, 2000):
            _, production = generator.generate_processing_data(make_batch(weight=weight), mild_day)
            expected = production.olive_processed * production.yield_pct / 100
            assert production.oil_produced == pytest.approx(expected, abs=0.05 + 1e-9)

    def test_consumption_figures(self, ctx, make_batch, mild_day):
        batch = make_batch(weight=1000)
        params, production = ProcessingGenerator(ctx).generate_processing_data(batch, mild_day)

        assert production.olive_processed == 1000
        assert production.water_consumption == 100.0

        nominal = base_processing_minutes(1000) + params.mixing_duration
        assert abs(production.processing_time - nominal) <= nominal * 0.025 + 1

        expected_energy = (
            1000 * 0.1
            * params.extraction_temperature / 27
            * params.centrifugation_speed / 3500
            * production.processing_time / base_processing_minutes(1000)
        )
        assert production.energy_consumption == pytest.approx(expected_energy, abs=0.05 + 1e-9)

    def test_production_linked_to_batch(self, ctx, make_batch, mild_day):
        batch = make_batch()
        _, production = ProcessingGenerator(ctx).generate_processing_data(batch, mild_day)
        assert production.batch_id == batch.id
        assert production.timestamp.date() == date(2024, 11, 15)


class TestHelpers:
    def test_yield_caps(self):
        # Top of the base range under the Premium modifier
        assert yield_cap("Ogliarola") == pytest.approx(15.125, abs=0.005)
        # Coratina would reach 17.05, above the 16.5 ceiling
        assert yield_cap("Coratina") == 16.5

    def test_base_minutes(self):
        assert base_processing_minutes(2000) == 90.0
