"""Periodic sweep marking expired active carts as abandoned."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from pocketcashier.data.models import CartModel
from pocketcashier.tasks import expire
from pocketcashier.tasks.expire import abandon_expired_carts

from conftest import BUSINESS_ID


def _cart(db, token, status="active", expires_in=timedelta(hours=1)):
    cart = CartModel(
        business_id=BUSINESS_ID,
        session_token=token,
        status=status,
        expires_at=datetime.now(timezone.utc) + expires_in,
    )
    db.add(cart)
    db.commit()
    return cart.id


def test_only_expired_active_carts_are_abandoned(db):
    expired = _cart(db, "tok-old", expires_in=timedelta(minutes=-5))
    fresh = _cart(db, "tok-new")
    converted = _cart(db, "tok-conv", status="converted", expires_in=timedelta(minutes=-5))

    assert abandon_expired_carts(db) == 1

    db.expire_all()
    assert db.get(CartModel, expired).status == "abandoned"
    assert db.get(CartModel, fresh).status == "active"
    assert db.get(CartModel, converted).status == "converted"


def test_second_sweep_is_noop(db):
    _cart(db, "tok-old", expires_in=timedelta(minutes=-5))

    assert abandon_expired_carts(db) == 1
    assert abandon_expired_carts(db) == 0


def test_explicit_now(db):
    cart_id = _cart(db, "tok-later", expires_in=timedelta(hours=1))

    assert abandon_expired_carts(db, now=datetime.now(timezone.utc) + timedelta(hours=2)) == 1

    db.expire_all()
    assert db.get(CartModel, cart_id).status == "abandoned"


def test_beat_task_uses_own_session(db, session_factory):
    cart_id = _cart(db, "tok-beat", expires_in=timedelta(minutes=-1))

    with patch.object(expire, "SessionLocal", session_factory):
        assert expire.expire_carts_task.run() == 1

    db.expire_all()
    assert db.get(CartModel, cart_id).status == "abandoned"
