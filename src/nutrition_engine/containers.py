"""Dependency container wiring for the engine."""

from dataclasses import dataclass

from nutrition_engine.adapters.in_memory_measures import InMemoryMeasureCatalog
from nutrition_engine.app_logging import configure_logging
from nutrition_engine.config import Settings
from nutrition_engine.services.energy import EnergyService
from nutrition_engine.services.portions import MeasureCatalog, PortionService


@dataclass
class EngineContainer:
    """Holds engine-wide dependencies."""

    settings: Settings
    catalog: MeasureCatalog
    portion_service: PortionService
    energy_service: EnergyService


def build_container(
    settings: Settings | None = None, catalog: MeasureCatalog | None = None
) -> EngineContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    resolved_catalog = catalog if catalog is not None else InMemoryMeasureCatalog()
    portion_service = PortionService(
        catalog=resolved_catalog,
        default_portion_grams=resolved_settings.default_portion_grams,
        decimals=resolved_settings.rounding_decimals,
        debug=resolved_settings.debug,
    )
    energy_service = EnergyService(
        goal_adjustment_kcal=resolved_settings.goal_adjustment_kcal,
        debug=resolved_settings.debug,
    )
    return EngineContainer(
        settings=resolved_settings,
        catalog=resolved_catalog,
        portion_service=portion_service,
        energy_service=energy_service,
    )
