"""
Tests pour Observable (derniere valeur rejouee aux nouveaux abonnes).
"""

from movieviewer.state.observable import Observable


class TestObservable:
    """Tests de publication et d'abonnement."""

    def test_initial_value(self):
        assert Observable(0).value == 0

    def test_subscribe_replays_current_value(self):
        observable = Observable("a")
        observable.value = "b"
        received = []

        observable.subscribe(received.append)

        assert received == ["b"]

    def test_subscribers_notified_on_change(self):
        observable = Observable(0)
        received = []
        observable.subscribe(received.append)

        observable.value = 1
        observable.value = 2

        assert received == [0, 1, 2]

    def test_equal_value_not_republished(self):
        observable = Observable([1])
        received = []
        observable.subscribe(received.append)

        observable.value = [1]

        assert received == [[1]]

    def test_unsubscribe(self):
        observable = Observable(0)
        received = []
        unsubscribe = observable.subscribe(received.append)

        unsubscribe()
        observable.value = 1
        unsubscribe()

        assert received == [0]

    def test_failing_subscriber_does_not_block_others(self):
        observable = Observable(0)
        received = []

        def broken(value):
            if value:
                raise RuntimeError("boom")

        observable.subscribe(broken)
        observable.subscribe(received.append)

        observable.value = 1

        assert received == [0, 1]
        assert observable.value == 1
