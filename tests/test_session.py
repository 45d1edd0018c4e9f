"""Unit tests for the render loop session."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from streamchat.chat import Fragment, Role, TurnEnded
from streamchat.llm import ChatMessage
from streamchat.ui import ChatSession, KeyAction, LoopState, UIAction


def type_text(session: ChatSession, text: str) -> None:
    for char in text:
        session.dispatch(KeyAction(UIAction.INSERT, char))


def submit(session: ChatSession):
    return session.dispatch(KeyAction(UIAction.SUBMIT))


def contents(session: ChatSession) -> list[tuple[Role, str]]:
    return [(m.role, m.content) for m in session.transcript.messages]


@pytest.fixture
def session():
    return ChatSession(model="llama3.2")


class TestSubmit:
    """Tests for turning input into a turn."""

    def test_submit_hi_then_stream_hello(self, session: ChatSession):
        type_text(session, "hi")
        turn = submit(session)

        assert contents(session) == [(Role.USER, "hi"), (Role.ASSISTANT, "")]
        assert session.ui.input_buffer == ""
        assert turn.model == "llama3.2"
        assert turn.snapshot == (ChatMessage(role="user", content="hi"),)

        session.channel.send(Fragment(turn.turn_id, "Hel"))
        session.channel.send(Fragment(turn.turn_id, "lo!"))
        assert session.drain() == 2

        assert contents(session) == [(Role.USER, "hi"), (Role.ASSISTANT, "Hello!")]

    def test_empty_submit_is_noop(self, session: ChatSession):
        assert submit(session) is None
        assert len(session.transcript) == 0
        assert session.turns == 0

    def test_submit_while_streaming_is_rejected(self, session: ChatSession):
        type_text(session, "first")
        submit(session)
        type_text(session, "second")

        assert submit(session) is None
        assert session.ui.input_buffer == "second"
        assert len(session.transcript) == 2

    def test_submit_after_reply_finished(self, session: ChatSession):
        type_text(session, "first")
        turn = submit(session)
        session.channel.send(Fragment(turn.turn_id, "one"))
        session.channel.send(TurnEnded(turn.turn_id))
        session.drain()

        type_text(session, "second")
        second = submit(session)

        assert second.turn_id != turn.turn_id
        assert [m.content for m in second.snapshot] == ["first", "one", "second"]
        assert session.turns == 2

    def test_snapshot_replays_failed_empty_reply(self, session: ChatSession):
        type_text(session, "a")
        turn = submit(session)
        session.channel.send(TurnEnded(turn.turn_id, error="refused"))
        session.drain()

        type_text(session, "b")
        second = submit(session)

        assert [(m.role, m.content) for m in second.snapshot] == [
            ("user", "a"),
            ("assistant", ""),
            ("user", "b"),
        ]


class TestDrain:
    """Tests for applying streamed updates."""

    def test_transport_failure_leaves_reply_empty(self, session: ChatSession):
        type_text(session, "hi")
        turn = submit(session)
        session.channel.send(TurnEnded(turn.turn_id, error="Cannot reach Ollama"))
        session.drain()

        reply = session.transcript.messages[-1]
        assert reply.content == ""
        assert reply.error == "Cannot reach Ollama"
        assert not session.busy

        # Still responsive to input
        type_text(session, "again")
        assert session.ui.input_buffer == "again"
        assert session.running

    def test_drain_with_nothing_pending(self, session: ChatSession):
        assert session.drain() == 0

    def test_usage_is_accumulated(self, session: ChatSession):
        for text in ("a", "b"):
            type_text(session, text)
            turn = submit(session)
            session.channel.send(
                TurnEnded(turn.turn_id, usage={"prompt_tokens": 10, "completion_tokens": 4})
            )
            session.drain()

        assert session.prompt_tokens == 20
        assert session.completion_tokens == 8

    def test_stale_end_marker_ignored(self, session: ChatSession):
        type_text(session, "hi")
        turn = submit(session)
        session.channel.send(TurnEnded(turn.turn_id + 1, usage={"prompt_tokens": 99}))
        session.drain()

        assert session.busy
        assert session.prompt_tokens == 0


class TestScrolling:
    """Tests for the visible history window."""

    def _fill(self, session: ChatSession, count: int) -> None:
        for i in range(count):
            session.transcript.append(Role.USER, f"line {i}")

    def test_page_down_clips_from_top(self, session: ChatSession):
        self._fill(session, 12)
        session.dispatch(KeyAction(UIAction.SCROLL_DOWN))

        assert session.ui.scroll_offset == 5
        assert session.visible_lines()[0] == "user: line 5"

    def test_page_up_clamps_at_zero(self, session: ChatSession):
        self._fill(session, 3)
        session.dispatch(KeyAction(UIAction.SCROLL_UP))

        assert session.ui.scroll_offset == 0
        assert len(session.visible_lines()) == 3

    def test_offset_past_end_gives_empty_window(self, session: ChatSession):
        self._fill(session, 3)
        for _ in range(4):
            session.dispatch(KeyAction(UIAction.SCROLL_DOWN))

        assert session.ui.scroll_offset == 20
        assert session.visible_lines() == []

    @given(st.integers(min_value=0, max_value=10_000), st.integers(min_value=0, max_value=30))
    def test_window_never_out_of_range(self, offset: int, line_count: int):
        """Property test: any offset yields a valid, possibly empty, window."""
        session = ChatSession(model="m")
        self._fill(session, line_count)
        session.ui.scroll_offset = offset

        assert len(session.visible_lines()) == max(0, line_count - offset)


class TestLifecycle:
    """Tests for loop state transitions."""

    def test_starts_running(self, session: ChatSession):
        assert session.state is LoopState.RUNNING

    def test_escape_terminates(self, session: ChatSession):
        type_text(session, "unsent")
        session.dispatch(KeyAction(UIAction.QUIT))

        assert session.state is LoopState.TERMINATING
        assert not session.running

    def test_close_is_idempotent(self, session: ChatSession):
        assert session.close()
        assert not session.close()
        assert session.channel.closed
        assert session.state is LoopState.TERMINATING

    def test_stream_after_close_is_dropped(self, session: ChatSession):
        type_text(session, "hi")
        turn = submit(session)
        session.close()

        assert not session.channel.send(Fragment(turn.turn_id, "late"))
        assert session.drain() == 0
