from promotion.core.broadcaster import Broadcaster


def test_messages_arrive_in_publish_order():
    broadcaster = Broadcaster("test-order")
    received = []
    broadcaster.register(received.append)

    for i in range(20):
        broadcaster.broadcast(i)

    assert broadcaster.flush()
    assert received == list(range(20))
    broadcaster.shutdown()


def test_failing_listener_does_not_stop_the_others():
    broadcaster = Broadcaster("test-failure")
    received = []

    def broken(message):
        raise RuntimeError("boom")

    broadcaster.register(broken)
    broadcaster.register(received.append)
    broadcaster.broadcast("hello")

    assert broadcaster.flush()
    assert received == ["hello"]
    broadcaster.shutdown()


def test_unregister_stops_delivery():
    broadcaster = Broadcaster("test-unregister")
    received = []
    unregister = broadcaster.register(received.append)
    broadcaster.broadcast("first")
    broadcaster.flush()

    unregister()
    assert broadcaster.listener_count == 0
    broadcaster.broadcast("second")
    broadcaster.flush()

    assert received == ["first"]
    # Unregistering twice is harmless
    unregister()
    broadcaster.shutdown()


def test_late_listener_misses_earlier_messages():
    broadcaster = Broadcaster("test-late")
    early, late = [], []
    broadcaster.register(early.append)
    broadcaster.broadcast(1)
    broadcaster.register(late.append)
    broadcaster.broadcast(2)
    broadcaster.flush()

    assert early == [1, 2]
    assert late == [2]
    broadcaster.shutdown()
