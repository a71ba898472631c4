"""Plans a site holds or can purchase."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ConfigDict, RootModel, StrictBool, StrictInt, StrictStr, TypeAdapter

from wpcom_remote.core.exceptions import FetchError
from wpcom_remote.core.types import Result
from wpcom_remote.resources.registry import resource
from wpcom_remote.transport.base import ApiVersion

from .base import SiteRemote, WireDate, WireModel


class RemotePlanDetail(WireModel):
    """One plan entry. Every field is optional on the wire."""

    plan_id: StrictStr | None = None
    auto_renew: StrictBool | None = None
    free_trial: StrictBool | None = None
    interval: StrictInt | None = None
    raw_discount: StrictInt | None = None
    raw_price: StrictInt | None = None
    has_domain_credit: StrictBool | None = None
    current_plan: StrictBool | None = None
    user_is_owner: StrictBool | None = None
    is_domain_upgrade: StrictBool | None = None
    auto_renew_date: WireDate | None = None
    currency_code: StrictStr | None = None
    discount_reason: StrictStr | None = None
    expiry: WireDate | None = None
    formatted_discount: StrictStr | None = None
    formatted_original_price: StrictStr | None = None
    formatted_price: StrictStr | None = None
    product_name: StrictStr | None = None
    product_slug: StrictStr | None = None
    subscribed_date: WireDate | None = None
    user_facing_expiry: WireDate | None = None

    @property
    def is_auto_renew(self) -> bool:
        return self.auto_renew or False

    @property
    def is_current_plan(self) -> bool:
        return self.current_plan or False

    @property
    def is_free_trial(self) -> bool:
        return self.free_trial or False

    @property
    def does_have_domain_credit(self) -> bool:
        return self.has_domain_credit or False


_plans_by_id = TypeAdapter(dict[str, RemotePlanDetail])


def _decode_plans(raw: Mapping[str, Any]) -> RemotePlanList:
    plans = []
    for plan_id, detail in _plans_by_id.validate_python(raw).items():
        if detail.plan_id is None:
            detail = detail.model_copy(update={"plan_id": plan_id})
        plans.append(detail)
    return RemotePlanList(tuple(plans))


@resource("sites/{site_id}/plans", version=ApiVersion.V1_3, decoder=_decode_plans)
class RemotePlanList(RootModel[tuple[RemotePlanDetail, ...]]):
    """Plans in the order the server listed them."""

    model_config = ConfigDict(frozen=True)

    def __iter__(self) -> Iterator[RemotePlanDetail]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    @property
    def current_plan(self) -> RemotePlanDetail | None:
        """The plan the site is on, if listed."""
        return next((plan for plan in self.root if plan.is_current_plan), None)


class PlanRemote(SiteRemote):
    async def get_plans(self) -> Result[RemotePlanList, FetchError]:
        """Fetch the site's plans."""
        return await self.fetcher.fetch(RemotePlanList, self.site_id)
