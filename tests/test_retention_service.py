from datetime import timedelta

from campushub.services.retention_service import RetentionService

from conftest import run_async


def _seed(store, clock):
    now = clock()
    registrations = store.collections["guest_registrations"]
    registrations["old"] = {"id": "old", "user_id": "guest_a_b_com", "expires_at": now - timedelta(days=1)}
    registrations["older"] = {"id": "older", "user_id": "guest_c_d_com", "expires_at": now - timedelta(days=30)}
    registrations["fresh"] = {"id": "fresh", "user_id": "guest_e_f_com", "expires_at": now + timedelta(days=1)}

    notifications = store.collections["notifications"]
    notifications["n_old"] = {"id": "n_old", "is_guest": True, "expires_at": now - timedelta(hours=1)}
    notifications["n_fresh"] = {"id": "n_fresh", "is_guest": True, "expires_at": now + timedelta(days=89)}
    notifications["n_member"] = {"id": "n_member", "is_guest": False, "expires_at": None}

    # Member partition is never swept
    store.collections["registrations"]["member"] = {"id": "member", "user_id": "u1"}


class TestRetentionSweep:

    def test_deletes_exactly_the_expired_guest_records(self, store, clock):
        _seed(store, clock)

        deleted = run_async(RetentionService(store, clock=clock).sweep())

        assert deleted == {"guest_registrations": 2, "notifications": 1}
        assert set(store.collections["guest_registrations"]) == {"fresh"}
        assert set(store.collections["notifications"]) == {"n_fresh", "n_member"}
        assert set(store.collections["registrations"]) == {"member"}

    def test_second_run_is_a_no_op(self, store, clock):
        _seed(store, clock)
        service = RetentionService(store, clock=clock)
        run_async(service.sweep())

        assert run_async(service.sweep()) == {"guest_registrations": 0, "notifications": 0}
        assert set(store.collections["guest_registrations"]) == {"fresh"}

    def test_one_batch_per_collection(self, store, clock):
        _seed(store, clock)

        run_async(RetentionService(store, clock=clock).sweep())

        assert [call for call in store.calls if call[0] == "delete_many"] == [
            ("delete_many", "guest_registrations"),
            ("delete_many", "notifications"),
        ]

    def test_registrations_expire_after_retention_window(self, registration_service, store, clock, free_event, guest_profile):
        run_async(registration_service.register_guest_for_event(free_event, guest_profile))
        service = RetentionService(store, clock=clock)

        clock.advance(days=89)
        assert run_async(service.sweep())["guest_registrations"] == 0

        clock.advance(days=2)
        assert run_async(service.sweep()) == {"guest_registrations": 1, "notifications": 1}
