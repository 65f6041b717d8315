from pypad.domain.models import Credential
from pypad.services.elevation.credential_cache import CredentialCache


class ExplodingHelper:
    def validate(self, secret):
        raise FileNotFoundError("sudo")

    def copy(self, source, dest, secret):
        raise FileNotFoundError("sudo")


def test_set_and_expiry_window(helper, clock):
    cache = CredentialCache(helper, ttl_seconds=300, clock=clock)
    assert not cache.is_active
    assert not cache.is_valid()

    cache.set("hunter2")
    assert cache.is_active
    assert cache.credential.expires_at == clock.now + 300

    clock.advance(300)
    assert cache.is_valid()  # inclusive boundary
    clock.advance(0.001)
    assert not cache.is_valid()
    # expiry is lazy: elevated mode stays on until cleared
    assert cache.is_active


def test_is_valid_with_explicit_now(helper, clock):
    cache = CredentialCache(helper, ttl_seconds=10, clock=clock)
    cache.set("x")
    assert cache.is_valid(clock.now + 5)
    assert not cache.is_valid(clock.now + 11)


def test_clear(helper, clock):
    cache = CredentialCache(helper, clock=clock)
    cache.set("x")
    cache.clear()
    assert cache.credential is None
    assert not cache.is_active


def test_validate_uses_helper_every_time(helper):
    cache = CredentialCache(helper)
    assert cache.validate("hunter2")
    assert cache.validate("hunter2")
    assert not cache.validate("wrong")
    assert [c[0] for c in helper.calls] == ["validate", "validate", "validate"]
    # validate never stores anything by itself
    assert cache.credential is None


def test_validate_returns_false_when_helper_cannot_start():
    cache = CredentialCache(ExplodingHelper())
    assert cache.validate("anything") is False


def test_credential_repr_hides_secret():
    assert "hunter2" not in repr(Credential("hunter2", 1.0))
