"""Base class for all scoring engines."""

import logging

from services.reference_data import ReferenceData, get_default_reference_data

logger = logging.getLogger(__name__)


class BaseEngine:
    """Base class for the deterministic scoring engines.

    Subclasses set `engine_name` (the identifier used in engine_registry) and
    expose one public operation. Reference data is injected through the
    constructor; when omitted, the configured default file is loaded on
    first use.
    """

    engine_name: str = ""

    def __init__(self, reference: ReferenceData | None = None) -> None:
        self._reference = reference
        self._loaded = reference is not None

    def load(self) -> None:
        """Resolve reference data from settings."""
        self._reference = get_default_reference_data()

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def reference(self) -> ReferenceData:
        self.ensure_loaded()
        return self._reference

    def ensure_loaded(self) -> None:
        """Load reference data if not already loaded."""
        if not self._loaded:
            logger.info("Loading engine: %s", self.engine_name)
            self.load()
            self._loaded = True
            logger.info("Engine ready: %s (reference data %s)", self.engine_name, self._reference.version)
