import unittest
from typing import Protocol
from unittest.mock import MagicMock

import pytest

from litewire import Container, NotInstantiableError


class Contains:  # noqa: PLW1641
    def __init__(self, substring):
        self.substring = substring

    def __repr__(self):
        return f"Contains({self.substring!r})"

    def __eq__(self, other):
        return isinstance(other, str) and self.substring in other


class PaymentClient(Protocol):
    def charge(self, order_id: str, amount_cents: int) -> None: ...


class InfoLogger(Protocol):
    def info(self, msg: object, *args: object) -> None: ...


class NullLogger:
    def info(self, msg: object, *args: object) -> None:
        pass


class StripeSdk:
    def pay(self, amount_usd: float, reference: str) -> bool:
        return True


class StripeAdapter:
    usd_per_cent = 0.01

    def __init__(self, sdk: StripeSdk, logger: InfoLogger) -> None:
        self._logger = logger
        self._sdk = sdk

    def charge(self, order_id: str, amount_cents: int) -> None:
        self._logger.info("adapting to stripe sdk api")
        amount_usd = amount_cents * self.usd_per_cent
        ok = self._sdk.pay(amount_usd, reference=order_id)
        if not ok:
            msg = "Stripe payment failed"
            raise RuntimeError(msg)


class Checkout:
    def __init__(self, payments: PaymentClient) -> None:
        self.payments = payments


class TestWiringAdapterThirdPartySDK(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()
        self.cont.bind(PaymentClient, lambda c: c.get(StripeAdapter))
        self.stripe_sdk = StripeSdk()
        self.stripe_sdk.pay = MagicMock(wraps=self.stripe_sdk.pay)
        self.cont.bind(StripeSdk, lambda _: self.stripe_sdk)
        self.logger = NullLogger()
        self.logger.info = MagicMock(wraps=self.logger.info)
        self.cont.bind(InfoLogger, lambda _: self.logger)

    def test_adapter_calls_adaptee(self):
        checkout = self.cont.get(Checkout)
        checkout.payments.charge("order-123", 5000)

        assert self.stripe_sdk.pay.call_count == 1
        assert self.stripe_sdk.pay.call_args[0][0] == 0.01 * 5000
        assert self.stripe_sdk.pay.call_args[1]["reference"] == "order-123"

        assert self.logger.info.call_args[0][0] == Contains("stripe sdk")


class TestAutoWiringAdapterThirdPartySDK(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()
        self.cont.bind(PaymentClient, lambda c: c.get(StripeAdapter))

    def test_unbound_protocol_dependency_raises(self):
        with pytest.raises(NotInstantiableError) as ctx:
            self.cont.get(Checkout)
        assert ctx.value.identifier == f"{__name__}.InfoLogger"

    def test_adapter_is_autowired_once_protocols_are_bound(self):
        self.cont.bind(InfoLogger, lambda c: c.get(NullLogger))

        checkout = self.cont.get(Checkout)
        checkout.payments.charge("order-123", 5000)

        assert isinstance(checkout.payments, StripeAdapter)
