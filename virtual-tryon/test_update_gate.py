from update_gate import UpdateGate


def run(gate, frames, step_ms, clock):
    admitted = []
    for i in range(1, frames + 1):
        clock.advance(step_ms)
        if gate.should_update():
            admitted.append(i)
    return admitted


def test_admits_every_twentieth_frame(fake_clock):
    gate = UpdateGate(clock=fake_clock)
    assert run(gate, 100, 0, fake_clock) == [20, 40, 60, 80, 100]


def test_admits_every_twentieth_frame_at_fast_cadence(fake_clock):
    # 1ms per frame never reaches the 50ms override
    gate = UpdateGate(clock=fake_clock)
    assert run(gate, 60, 1, fake_clock) == [20, 40, 60]


def test_time_override_admits_early(fake_clock):
    gate = UpdateGate(clock=fake_clock)
    assert not gate.should_update()
    fake_clock.advance(60)
    assert gate.should_update()
    # Admission resets the timer
    assert not gate.should_update()


def test_exactly_fifty_ms_is_not_enough(fake_clock):
    gate = UpdateGate(clock=fake_clock)
    fake_clock.advance(50)
    assert not gate.should_update()
    fake_clock.advance(0.1)
    assert gate.should_update()


def test_slow_sensor_admits_every_frame(fake_clock):
    # 30fps is slower than the 50ms bound would allow at 20 frames per update
    gate = UpdateGate(clock=fake_clock)
    assert run(gate, 10, 60, fake_clock) == list(range(1, 11))


def test_dropped_frames_still_count(fake_clock):
    gate = UpdateGate(every_n=3, clock=fake_clock)
    results = [gate.should_update() for _ in range(6)]
    assert results == [False, False, True, False, False, True]
    assert gate.frame_count == 6
