"""
Quality generator: lab analysis, panel test and certification per batch.

Three composite factors in [0, 1] drive every analyte:
- base_quality: Premium olives 0.9, Standard 0.7
- freshness: decays linearly to 0 over 48 hours from harvest to arrival
- process_quality: penalizes extraction above the 27 C cold-extraction limit

Each analyte starts from a variety base value, is scaled by the factor
deficits, jittered, and clamped to its regulatory limit. Certification is a
deterministic rule over the clamped values.
"""

from dataclasses import dataclass
from datetime import date

from ..constants import (
    BASE_ACIDITY,
    BASE_PANEL_SCORE,
    BASE_PEROXIDES,
    BASE_POLYPHENOLS,
    CERTIFICATION_PREFIX,
    DOP_ORIGIN,
    DOP_VARIETIES,
    MAX_FRESHNESS_HOURS,
    MAX_PROCESSING_TEMP,
    QUALITY_LIMITS,
)
from ..models import OilAnalysis, OlivesBatch, ProcessingParameters, QualityCertification
from ..queries import clamp
from .base import BaseGenerator


@dataclass(frozen=True)
class QualityFactors:
    base_quality: float
    freshness: float
    process_quality: float
    variety: str

    @property
    def is_premium(self) -> bool:
        return self.base_quality > 0.8


def quality_factors(batch: OlivesBatch, parameters: ProcessingParameters) -> QualityFactors:
    """Derive the composite quality factors of a batch."""
    base_quality = 0.9 if batch.quality == "Premium" else 0.7

    hours = (batch.arrival_timestamp - batch.harvest_date).total_seconds() / 3600
    freshness = max(0.0, 1 - hours / MAX_FRESHNESS_HOURS)

    extraction = parameters.extraction_temperature
    if extraction <= MAX_PROCESSING_TEMP:
        process_quality = 1 - (extraction / MAX_PROCESSING_TEMP) * 0.2
    else:
        process_quality = 0.7

    return QualityFactors(
        base_quality=base_quality,
        freshness=freshness,
        process_quality=process_quality,
        variety=batch.variety,
    )


def one_year_later(day: date) -> date:
    """Same calendar date one year on; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day.replace(year=day.year + 1, day=28)


def is_extra_virgin(
    acidity: float, peroxides: float, alkyl_esters: float, organoleptics_score: float
) -> bool:
    """EU extra-virgin classification thresholds."""
    return (
        acidity <= QUALITY_LIMITS["acidity"]["extra_virgin"]
        and peroxides <= QUALITY_LIMITS["peroxides"]["extra_virgin"]
        and alkyl_esters <= QUALITY_LIMITS["alkyl_esters"]["extra_virgin"]
        and organoleptics_score >= QUALITY_LIMITS["panel_test"]["min_extra_virgin"]
    )


class QualityGenerator(BaseGenerator):
    """Generate the OilAnalysis of a processed batch."""

    def generate_quality_data(
        self, batch: OlivesBatch, parameters: ProcessingParameters
    ) -> OilAnalysis:
        """
        Analyse the oil of a batch and decide its certifications.

        Args:
            batch: Processed batch
            parameters: Process parameters applied to it

        Returns:
            OilAnalysis with embedded QualityCertification
        """
        factors = quality_factors(batch, parameters)

        acidity = self.generate_acidity(factors)
        peroxides = self.generate_peroxides(factors)
        polyphenols = self.generate_polyphenols(factors)
        alkyl_esters = self.generate_alkyl_esters(factors)
        score = self.generate_organoleptics_score(factors)

        certification = self.certify(
            batch,
            acidity=acidity,
            peroxides=peroxides,
            alkyl_esters=alkyl_esters,
            organoleptics_score=score,
            analysis_day=parameters.timestamp.date(),
        )

        return OilAnalysis(
            batch_id=batch.id,
            timestamp=parameters.timestamp,
            acidity=acidity,
            peroxides=peroxides,
            polyphenols=polyphenols,
            alkyl_esters=alkyl_esters,
            organoleptics_score=score,
            quality_certification=certification,
        )

    def _jitter(self, spread: float) -> float:
        """Multiplicative noise of +/- spread/2."""
        return 1 + (self.uniform() - 0.5) * spread

    def generate_acidity(self, factors: QualityFactors) -> float:
        """Free acidity (% oleic acid), at most 0.8."""
        acidity = BASE_ACIDITY[factors.variety] * (
            1
            + (1 - factors.base_quality) * 0.5
            + (1 - factors.freshness) * 0.3
            + (1 - factors.process_quality) * 0.2
        )
        acidity *= self._jitter(0.1)
        return round(clamp(acidity, 0.0, QUALITY_LIMITS["acidity"]["extra_virgin"]), 2)

    def generate_peroxides(self, factors: QualityFactors) -> int:
        """Peroxide value (meq O2/kg), at most 20."""
        peroxides = BASE_PEROXIDES[factors.variety] * (
            1
            + (1 - factors.freshness) * 0.4
            + (1 - factors.process_quality) * 0.3
            + (1 - factors.base_quality) * 0.3
        )
        peroxides *= self._jitter(0.2)
        return int(round(clamp(peroxides, 0, QUALITY_LIMITS["peroxides"]["extra_virgin"])))

    def generate_polyphenols(self, factors: QualityFactors) -> int:
        """Total polyphenols (mg/kg), within 200-500. Coratina runs higher."""
        polyphenols = (
            BASE_POLYPHENOLS[factors.variety]
            * (factors.base_quality + factors.freshness * 0.5 + factors.process_quality * 0.5)
            / 2
        )
        polyphenols *= self._jitter(0.1)
        limits = QUALITY_LIMITS["polyphenols"]
        return int(round(clamp(polyphenols, limits["min"], limits["max"])))

    def generate_alkyl_esters(self, factors: QualityFactors) -> int:
        """Fatty acid alkyl esters (mg/kg), at most 75."""
        base = 35.0 if factors.is_premium else 50.0
        esters = base * (
            1 + (1 - factors.freshness) * 0.3 + (1 - factors.process_quality) * 0.2
        )
        esters *= self._jitter(0.2)
        return int(round(clamp(esters, 0, QUALITY_LIMITS["alkyl_esters"]["extra_virgin"])))

    def generate_organoleptics_score(self, factors: QualityFactors) -> float:
        """Panel test score on the 0-9 scale."""
        premium_base, standard_base = BASE_PANEL_SCORE[factors.variety]
        base = premium_base if factors.is_premium else standard_base

        score = base * (
            factors.process_quality * 0.4 + factors.freshness * 0.3 + factors.base_quality * 0.3
        )
        score += (self.uniform() - 0.5) * 0.6
        return round(clamp(score, 0.0, QUALITY_LIMITS["panel_test"]["max"]), 1)

    def certify(
        self,
        batch: OlivesBatch,
        acidity: float,
        peroxides: float,
        alkyl_esters: float,
        organoleptics_score: float,
        analysis_day: date,
    ) -> QualityCertification:
        """Apply the certification rules; no randomness involved."""
        extra_virgin = is_extra_virgin(acidity, peroxides, alkyl_esters, organoleptics_score)
        is_dop = extra_virgin and batch.origin == DOP_ORIGIN and batch.variety in DOP_VARIETIES
        is_organic = batch.is_organic and acidity <= QUALITY_LIMITS["acidity"]["organic"]

        return QualityCertification(
            batch_id=batch.id,
            is_extra_virgin=extra_virgin,
            is_dop=is_dop,
            is_organic=is_organic,
            certification_body=self.config.certification_body,
            certification_date=analysis_day,
            expiry_date=one_year_later(analysis_day),
            certification_number=f"{CERTIFICATION_PREFIX}-{batch.id}",
        )
