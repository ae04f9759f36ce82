"""
Tests for expiration-aware role resolution
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.models.user_profile import UserRole
from app.roles.resolver import effective_role, is_admin, is_role_active


NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
PAST = NOW - timedelta(days=1)
FUTURE = NOW + timedelta(days=1)


def profile(role, expires_at=None):
    return SimpleNamespace(role=role.value if isinstance(role, UserRole) else role, expires_at=expires_at)


class TestEffectiveRole:

    def test_missing_profile_is_normal(self):
        assert effective_role(None, NOW) is UserRole.NORMAL

    @pytest.mark.parametrize("role", [UserRole.VIP, UserRole.SVIP])
    def test_expired_tier_falls_back_to_normal(self, role):
        assert effective_role(profile(role, PAST), NOW) is UserRole.NORMAL

    @pytest.mark.parametrize("role", [UserRole.VIP, UserRole.SVIP])
    @pytest.mark.parametrize("expires_at", [None, FUTURE])
    def test_unexpired_tier_keeps_role(self, role, expires_at):
        assert effective_role(profile(role, expires_at), NOW) is role

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.NORMAL])
    @pytest.mark.parametrize("expires_at", [None, PAST, FUTURE])
    def test_admin_and_normal_ignore_expiration(self, role, expires_at):
        assert effective_role(profile(role, expires_at), NOW) is role

    def test_expiry_at_exact_instant_is_expired(self):
        assert effective_role(profile(UserRole.VIP, NOW), NOW) is UserRole.NORMAL

    def test_documented_examples(self):
        vip = profile(UserRole.VIP, datetime(2020, 1, 1, tzinfo=timezone.utc))
        svip = profile(UserRole.SVIP, None)

        assert effective_role(vip, NOW) is UserRole.NORMAL
        assert effective_role(svip, NOW) is UserRole.SVIP

    def test_naive_timestamps_are_treated_as_utc(self):
        naive_future = datetime(2024, 1, 1, 0, 30)
        assert effective_role(profile(UserRole.SVIP, naive_future), NOW) is UserRole.SVIP

    def test_unknown_stored_role_is_rejected(self):
        with pytest.raises(ValueError):
            effective_role(profile("superuser"), NOW)


class TestRoleActive:

    def test_missing_profile_is_inactive(self):
        assert is_role_active(None, NOW) is False

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.NORMAL])
    def test_non_expiring_roles_are_active(self, role):
        assert is_role_active(profile(role, PAST), NOW) is True

    def test_tier_activity_follows_expiration(self):
        assert is_role_active(profile(UserRole.VIP, FUTURE), NOW) is True
        assert is_role_active(profile(UserRole.VIP, None), NOW) is True
        assert is_role_active(profile(UserRole.SVIP, PAST), NOW) is False

    def test_is_admin(self):
        assert is_admin(profile(UserRole.ADMIN), NOW)
        assert not is_admin(profile(UserRole.SVIP), NOW)
        assert not is_admin(None, NOW)
