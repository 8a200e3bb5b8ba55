import pytest

from hookmock.config import HookMockConfig
from hookmock.context import MockContext
from hookmock.errors import ExpectationFailedError, OverCallError, UnexpectedCallError
from hookmock.matchers import TypeOf


class Plugin:
    """A tiny plugin written against the host API."""

    def __init__(self, api) -> None:
        self.api = api

    def register(self) -> None:
        self.api.add_action("init", self.on_init)
        self.api.add_filter("the_content", self.filter_content, 20, 2)

    def on_init(self) -> None:
        self.api.do_action("my_plugin_loaded", self.api.get_option("my_plugin_version"))

    def filter_content(self, content: str, post_id: int) -> str:
        return self.api.apply_filters("my_plugin_content", content, post_id)


def _context(**overrides) -> MockContext:
    return MockContext(HookMockConfig.model_validate(overrides)).set_up()


def test_plugin_wiring_is_verified() -> None:
    ctx = _context()
    plugin = Plugin(ctx.api)
    ctx.expect_action_added("init", plugin.on_init)
    ctx.expect_filter_added("the_content", plugin.filter_content, 20, 2)

    plugin.register()

    ctx.assert_hooks_added()
    ctx.tear_down()


def test_missing_hook_is_named_in_failure() -> None:
    ctx = _context()
    plugin = Plugin(ctx.api)
    ctx.expect_action_added("init", plugin.on_init)
    ctx.expect_action_added("wp_head", plugin.on_init)

    plugin.register()

    with pytest.raises(ExpectationFailedError, match="Method failed to add hooks: action::wp_head"):
        ctx.assert_hooks_added()


def test_expect_action_with_arguments() -> None:
    ctx = _context()
    ctx.wp_function("get_option", args=["my_plugin_version"], returns="1.2.0", times=1)
    intercept = ctx.expect_action("my_plugin_loaded", "1.2.0")

    Plugin(ctx.api).on_init()

    intercept.assert_called_once_with("1.2.0")
    ctx.assert_actions_called()
    ctx.assert_functions_called()
    ctx.tear_down()


def test_expect_action_not_called_fails_with_every_name() -> None:
    ctx = _context()
    ctx.expect_action("save_post")
    ctx.expect_action("publish_post", 5)
    ctx.on_action("init").with_count(1)

    ctx.api.do_action("publish_post", 6)

    with pytest.raises(ExpectationFailedError) as exc:
        ctx.assert_actions_called()
    assert exc.value.failures == ["init", "save_post", "publish_post"]
    assert str(exc.value) == "Method failed to invoke actions: init, save_post, publish_post"


def test_invoke_action_counts_like_do_action() -> None:
    ctx = _context()
    ctx.on_action("init").with_count("2+")

    ctx.invoke_action("init")
    assert not ctx.verdict().passed
    ctx.api.do_action("init")
    assert ctx.verdict().passed


def test_apply_filters_reply_and_passthrough() -> None:
    ctx = _context()
    ctx.on_filter("my_plugin_content").with_arguments("Hello", 5).reply("Howdy")
    plugin = Plugin(ctx.api)

    assert plugin.filter_content("Hello", 5) == "Howdy"
    assert plugin.filter_content("Bye", 5) == "Bye"
    assert ctx.api.apply_filters("unmocked", "value", 1) == "value"


def test_expect_filter_with_type_matcher() -> None:
    ctx = _context()
    intercept = ctx.expect_filter("the_content", "*", TypeOf("string"))

    ctx.api.apply_filters("the_content", "hello", 42)
    assert not intercept.called
    with pytest.raises(ExpectationFailedError, match="the_content"):
        ctx.assert_filters_called()

    ctx.api.apply_filters("the_content", "hello", "world")
    ctx.assert_filters_called()


def test_fuzzy_object_argument() -> None:
    ctx = _context()
    ctx.expect_action("wp_insert_post", ctx.fuzzy_object({"post_type": "page"}))

    ctx.api.do_action("wp_insert_post", {"post_type": "page", "post_title": "About"})

    ctx.assert_actions_called()


def test_over_call_surfaces_immediately() -> None:
    ctx = _context()
    ctx.on_action("init").with_count("1-")

    ctx.api.do_action("init")
    with pytest.raises(OverCallError):
        ctx.api.do_action("init")


def test_over_call_deferred_when_configured() -> None:
    ctx = _context(hooks={"raise_on_over_call": False})
    ctx.on_action("init").with_count("1-")

    ctx.api.do_action("init")
    ctx.api.do_action("init")

    verdict = ctx.verdict()
    assert verdict.over_calls == ["init"]
    with pytest.raises(ExpectationFailedError, match="Called too many times: init"):
        ctx.verify()


def test_tear_down_verifies_and_always_flushes() -> None:
    ctx = _context()
    ctx.expect_action("init")

    with pytest.raises(ExpectationFailedError):
        ctx.tear_down()

    assert len(ctx.registry) == 0
    assert ctx.verdict().passed
    ctx.set_up()
    ctx.tear_down()


def test_tear_down_without_verification() -> None:
    ctx = _context(lifecycle={"verify_on_teardown": False})
    ctx.expect_action("init")
    ctx.tear_down()
    assert not ctx.active


def test_session_isolates_tests() -> None:
    ctx = MockContext()
    with ctx.session():
        ctx.on_action("init").with_count(1)
        ctx.api.do_action("init")
        ctx.wp_passthru_function("esc_html")
        assert ctx.api.esc_html("<b>") == "<b>"

    with ctx.session():
        assert ctx.registry.find("action", "init") is None
        with pytest.raises(AttributeError):
            ctx.api.esc_html("<b>")
        with pytest.raises(UnexpectedCallError):
            ctx.api.call("esc_html", "<b>")


def test_session_flushes_when_test_body_fails() -> None:
    ctx = MockContext()
    with pytest.raises(RuntimeError):
        with ctx.session():
            ctx.expect_action("init")
            raise RuntimeError("boom")
    assert len(ctx.registry) == 0
    assert not ctx.active


def test_default_priority_and_accepted_args_from_config() -> None:
    ctx = _context(hooks={"default_priority": 5, "default_accepted_args": 3})

    def callback() -> None:
        return None

    ctx.expect_action_added("init", callback)
    ctx.api.add_action("init", callback, 5, 3)
    ctx.assert_hooks_added()


def test_constants() -> None:
    ctx = _context(constants={"ABSPATH": "/var/www/"})
    assert ctx.api.constant("ABSPATH") == "/var/www/"
    assert ctx.api.constant("DAY_IN_SECONDS") == 86400
    with pytest.raises(KeyError):
        ctx.api.constant("WP_DEBUG")


def test_over_called_action_is_reported_only_as_over_call() -> None:
    ctx = _context(hooks={"raise_on_over_call": False})
    ctx.on_action("init").with_count("1-")
    ctx.expect_action("init")

    ctx.api.do_action("init")
    ctx.api.do_action("init")

    verdict = ctx.verdict()
    assert verdict.unsatisfied_actions == []
    with pytest.raises(ExpectationFailedError) as exc:
        ctx.verify()
    assert str(exc.value) == "Called too many times: init"
    assert exc.value.failures == ["Called too many times: init"]


def test_over_called_function_is_reported_only_as_over_call() -> None:
    ctx = _context(hooks={"raise_on_over_call": False})
    ctx.wp_function("get_option", times=1)

    ctx.api.get_option("a")
    ctx.api.get_option("b")

    with pytest.raises(ExpectationFailedError) as exc:
        ctx.verify()
    assert str(exc.value) == "Called too many times: get_option"


def test_abandon_discards_without_verifying() -> None:
    ctx = _context()
    ctx.expect_action("init")

    ctx.abandon()

    assert not ctx.active
    assert len(ctx.registry) == 0
    assert ctx.verdict().passed
