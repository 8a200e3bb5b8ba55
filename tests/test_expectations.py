from hookmock.expectations import ExpectedCall, HookExpectation
from hookmock.matchers import TypeOf
from hookmock.models import HookKind


def test_no_arguments_configured_accepts_any_call() -> None:
    expectation = HookExpectation(HookKind.ACTION, "init")
    assert expectation.notify(()) is not None
    assert expectation.notify((1, "two")) is not None
    assert expectation.constraint.observed == 2


def test_non_matching_call_is_silent_and_not_counted() -> None:
    expectation = HookExpectation(HookKind.FILTER, "the_content").with_arguments("*", TypeOf("string"))

    assert expectation.notify(("hello", "world")) is not None
    assert expectation.notify(("hello", 42)) is None
    assert expectation.constraint.observed == 1


def test_count_is_shared_across_argument_variants() -> None:
    expectation = (
        HookExpectation(HookKind.ACTION, "save_post")
        .with_arguments(1)
        .with_arguments(2)
        .with_count(2)
    )

    expectation.notify((1,))
    assert not expectation.is_satisfied()
    expectation.notify((2,))
    assert expectation.is_satisfied()
    expectation.notify((3,))
    assert expectation.constraint.observed == 2


def test_responder_runs_for_each_matching_variant_but_counts_once() -> None:
    seen: list[tuple[str, tuple]] = []
    expectation = (
        HookExpectation(HookKind.ACTION, "init")
        .with_arguments("*")
        .perform(lambda *args: seen.append(("any", args)))
        .with_arguments("exact")
        .perform(lambda *args: seen.append(("exact", args)))
    )

    expectation.notify(("exact",))
    expectation.notify(("other",))

    assert seen == [("any", ("exact",)), ("exact", ("exact",)), ("any", ("other",))]
    assert expectation.constraint.observed == 2


def test_perform_without_arguments_creates_accept_any_call() -> None:
    calls: list[tuple] = []
    expectation = HookExpectation(HookKind.ACTION, "wp_loaded").perform(lambda *args: calls.append(args))

    expectation.notify(("a", "b"))

    assert calls == [("a", "b")]
    assert expectation.calls == [ExpectedCall(responder=expectation.calls[0].responder)]


def test_reply_is_bound_to_its_argument_variant() -> None:
    expectation = (
        HookExpectation(HookKind.FILTER, "the_title")
        .with_arguments("Hello", 5)
        .reply("Howdy")
        .with_arguments("*", "*")
        .reply_with(lambda value, post_id: f"{value} #{post_id}")
    )

    assert expectation.reply_for(("Hello", 5)).resolve(("Hello", 5)) == "Howdy"
    assert expectation.reply_for(("Bye", 9)).resolve(("Bye", 9)) == "Bye #9"
    assert expectation.reply_for(("only-one",)) is None


def test_with_count_keeps_observed_calls() -> None:
    expectation = HookExpectation(HookKind.ACTION, "init")
    expectation.notify(())
    expectation.with_count("2+")
    assert expectation.constraint.observed == 1
    assert not expectation.is_satisfied()


def test_describe_names_hook_and_count() -> None:
    expectation = HookExpectation(HookKind.ACTION, "init").with_count(1)
    assert expectation.describe() == "init (expected exactly 1 calls, got 0)"
    assert expectation.key == (HookKind.ACTION, "init")
