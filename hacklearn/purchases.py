"""Simulated project purchases.

No payment is taken. Buying a project only flips its flag in the
``purchases`` mapping of the injected store, which unlocks the download
reference. Flags are keyed by the full ``topic/project`` slug since
project slugs are only unique within their topic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from hacklearn.core.logging_config import get_logger
from hacklearn.exceptions import PurchaseRequiredError
from hacklearn.models import ProjectListing
from hacklearn.storage import KeyValueStore

__all__ = ["PURCHASES_KEY", "PurchaseLedger", "PurchaseReceipt"]

_LOGGER = get_logger("purchases")

PURCHASES_KEY = "purchases"


@dataclass(frozen=True, slots=True)
class PurchaseReceipt:
    project_slug: str
    price: int
    message: str


class PurchaseLedger:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _flags(self) -> Dict[str, bool]:
        flags = self.store.get(PURCHASES_KEY, {})
        return flags if isinstance(flags, dict) else {}

    def is_owned(self, listing: ProjectListing) -> bool:
        return bool(self._flags().get(listing.full_slug))

    def purchase(self, listing: ProjectListing) -> PurchaseReceipt:
        """Mark the listed project as bought. Buying twice is harmless."""
        project = listing.project
        flags = self._flags()
        flags[listing.full_slug] = True
        self.store.set(PURCHASES_KEY, flags)
        _LOGGER.info("Simulated purchase recorded", extra={"project": listing.full_slug, "price": project.price})
        return PurchaseReceipt(
            project_slug=listing.full_slug,
            price=project.price,
            message=(
                f"Payment simulation complete: ₹{project.price}\n"
                "(Integrate Razorpay/UPI for real payments.)"
            ),
        )

    def download_ref(self, listing: ProjectListing) -> str:
        """Download reference for an owned project.

        Raises:
            PurchaseRequiredError: the project has not been bought
        """
        if not self.is_owned(listing):
            raise PurchaseRequiredError(listing.full_slug, listing.project.price)
        return listing.project.download_ref
