import io

from minestake.animation import LoadingAnimation, run_and_wait, status_update


def test_loading_animation_prints_dots():
    stream = io.StringIO()
    run_and_wait(LoadingAnimation("Placing mines", dots=3, dot_delay=0, done_delay=0, stream=stream))
    assert stream.getvalue() == "Placing mines... Done!\n"


def test_status_update_joined():
    stream = io.StringIO()
    thread = status_update("Game Started!", delay=0, stream=stream)
    run_and_wait(thread)
    assert not thread.is_alive()
    assert stream.getvalue() == ">> Game Started!\n"
