import threading
import unittest

from cpauth.errors import NotFound
from cpauth.store import ChallengeStore, RegistrationStore


class TestRegistrationStore(unittest.TestCase):
    def setUp(self) -> None:
        self.store = RegistrationStore()

    def test_register_and_get(self) -> None:
        self.store.register("alice", 2, 3)
        record = self.store.get("alice")
        self.assertEqual((record.username, record.y1, record.y2), ("alice", 2, 3))
        self.assertEqual((record.r1, record.r2, record.challenge, record.solution), (0, 0, 0, 0))
        self.assertEqual(record.session_id, "")
        self.assertIn("alice", self.store)
        self.assertEqual(len(self.store), 1)

    def test_re_registration_overwrites(self) -> None:
        self.store.register("alice", 2, 3)
        self.store.update("alice", r1=8, r2=4, challenge=4, session_id="old")
        self.store.register("alice", 5, 7)
        record = self.store.get("alice")
        self.assertEqual((record.y1, record.y2, record.r1, record.session_id), (5, 7, 0, ""))
        self.assertEqual(len(self.store), 1)

    def test_unknown_user(self) -> None:
        with self.assertRaises(NotFound):
            self.store.get("bob")
        with self.assertRaises(NotFound):
            self.store.update("bob", r1=1)
        with self.assertRaises(NotFound):
            self.store.remove("bob")

    def test_update_returns_snapshot(self) -> None:
        self.store.register("alice", 2, 3)
        snapshot = self.store.update("alice", r1=8, r2=4, challenge=4)
        self.assertEqual((snapshot.r1, snapshot.r2, snapshot.challenge), (8, 4, 4))
        snapshot.r1 = 99
        self.assertEqual(self.store.get("alice").r1, 8)

    def test_update_rejects_unknown_fields(self) -> None:
        self.store.register("alice", 2, 3)
        with self.assertRaises(AttributeError):
            self.store.update("alice", x=6)
        with self.assertRaises(AttributeError):
            self.store.update("alice", username="mallory")

    def test_rejected_update_writes_nothing(self) -> None:
        self.store.register("alice", 2, 3)
        with self.assertRaises(AttributeError):
            self.store.update("alice", r1=99, bogus=1)
        self.assertEqual(self.store.get("alice").r1, 0)

    def test_remove(self) -> None:
        self.store.register("alice", 2, 3)
        self.store.remove("alice")
        self.assertNotIn("alice", self.store)

    def test_concurrent_registrations(self) -> None:
        barrier = threading.Barrier(16)

        def worker(index: int) -> None:
            barrier.wait()
            for round_number in range(50):
                self.store.register(f"user-{index}", index, round_number)
                self.store.update(f"user-{index}", challenge=round_number)

        threads = [threading.Thread(target=worker, args=(index,)) for index in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(self.store), 16)
        for index in range(16):
            record = self.store.get(f"user-{index}")
            self.assertEqual((record.y1, record.y2, record.challenge), (index, 49, 49))


class TestChallengeStore(unittest.TestCase):
    def setUp(self) -> None:
        self.store = ChallengeStore()

    def test_put_and_resolve(self) -> None:
        record = self.store.put_challenge("auth-1", "alice")
        self.assertEqual((record.auth_id, record.username), ("auth-1", "alice"))
        self.assertEqual(self.store.resolve_challenge("auth-1"), "alice")
        self.assertIn("auth-1", self.store)

    def test_resolution_does_not_consume(self) -> None:
        self.store.put_challenge("auth-1", "alice")
        self.store.resolve_challenge("auth-1")
        self.assertEqual(self.store.resolve_challenge("auth-1"), "alice")
        self.assertEqual(len(self.store), 1)

    def test_unknown_auth_id(self) -> None:
        with self.assertRaises(NotFound):
            self.store.resolve_challenge("missing")
        with self.assertRaises(NotFound):
            self.store.remove("missing")

    def test_remove(self) -> None:
        self.store.put_challenge("auth-1", "alice")
        self.store.remove("auth-1")
        with self.assertRaises(NotFound):
            self.store.resolve_challenge("auth-1")


if __name__ == "__main__":
    unittest.main()
