"""
Unit tests for the Cog runtime interpreter.
"""

import io
import logging

import pytest
from coglang import (
    Interpreter, run_source, run_file, create_context, BuiltinRegistry, Environment,
    int_val, string_val, none_val, NoneValue, FunctionValue,
    ParseFailure, LexerError, UndefinedName, NotCallable, TypeMismatch, NotSummable,
)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def interp(output):
    return Interpreter(output=output)


class TestLiterals:
    """Test literal evaluation."""

    def test_string(self, interp):
        assert interp.evaluate_expression('"abc"') == string_val("abc")

    def test_int(self, interp):
        assert interp.evaluate_expression("42") == int_val(42)

    def test_negative_int(self, interp):
        assert interp.evaluate_expression("-3") == int_val(-3)

    def test_empty_is_none(self, interp):
        assert isinstance(interp.evaluate_expression(""), NoneValue)


class TestComments:
    """Test comment statements."""

    def test_comment_is_echoed(self, interp, output):
        """A comment writes 'Comment: <line>' and returns nothing."""
        assert interp.execute_statement("// header") is None
        assert output.getvalue() == "Comment: // header\n"

    def test_trailing_comment_skips_code(self, interp, output):
        """Code on a line with // is not run."""
        interp.execute_statement("x = 5 // five")
        assert output.getvalue() == "Comment: x = 5 // five\n"
        assert not interp.environment.contains("x")

    def test_blank_line(self, interp, output):
        """A blank line evaluates to None and writes nothing."""
        assert isinstance(interp.execute_statement(""), NoneValue)
        assert output.getvalue() == ""


class TestVariables:
    """Test assignment and lookup."""

    def test_assign_and_read(self, interp):
        """Assignment returns the value and binds it."""
        assert interp.execute_statement("x = 5") == int_val(5)
        assert interp.evaluate_expression("x") == int_val(5)

    def test_reassign_overwrites(self, interp):
        interp.execute_statement("x = 5")
        interp.execute_statement('x = "five"')
        assert interp.evaluate_expression("x") == string_val("five")

    def test_chained_assignment(self, interp):
        """x = y = 3 binds both names."""
        interp.execute_statement("x = y = 3")
        assert interp.evaluate_expression("x") == int_val(3)
        assert interp.evaluate_expression("y") == int_val(3)

    def test_hyphenated_name(self, interp):
        interp.execute_statement("my-var = 2")
        assert interp.evaluate_expression("my-var + 1") == int_val(3)

    def test_binding_is_a_copy(self, interp):
        """Lookups return clones of the bound value."""
        interp.execute_statement("x = 1")
        first = interp.evaluate_expression("x")
        first.data = 99
        assert interp.evaluate_expression("x") == int_val(1)

    def test_undefined_name(self, interp):
        """Reading an unbound name raises UndefinedName."""
        with pytest.raises(UndefinedName) as exc_info:
            interp.execute_statement("y")
        diag = exc_info.value.diagnostic
        assert diag.code == "E301"
        assert "'y'" in diag.message
        assert diag.source_line == "y"


class TestAddition:
    """Test '+' evaluation."""

    def test_int_sum(self, interp):
        assert interp.evaluate_expression("1 + 2") == int_val(3)

    def test_chain(self, interp):
        assert interp.evaluate_expression("1 + 2 + 3 + 4") == int_val(10)

    def test_with_variable(self, interp):
        interp.execute_statement("x = 5")
        assert interp.evaluate_expression("x + 1") == int_val(6)

    def test_assignment_in_right_operand(self, interp):
        """1 + x = 2 evaluates to 3 and binds x to 2."""
        assert interp.evaluate_expression("1 + x = 2") == int_val(3)
        assert interp.evaluate_expression("x") == int_val(2)

    def test_type_mismatch(self, interp):
        """int + string raises TypeMismatch with a location."""
        with pytest.raises(TypeMismatch) as exc_info:
            interp.execute_statement('1 + "a"')
        diag = exc_info.value.diagnostic
        assert diag.code == "E303"
        assert diag.span is not None
        assert diag.source_line == '1 + "a"'

    def test_strings_not_summable(self, interp):
        with pytest.raises(NotSummable):
            interp.execute_statement('"a" + "b"')

    def test_print_results_not_summable(self, interp, output):
        """Both prints run, then None + None fails."""
        with pytest.raises(NotSummable):
            interp.execute_statement("print(1 + 2) + print(3)")
        assert output.getvalue() == "3\n3\n"


class TestPrint:
    """Test the print built-in."""

    def test_print_string(self, interp, output):
        """print writes the text and a newline, returning None."""
        result = interp.execute_statement('print("Hello world")')
        assert isinstance(result, NoneValue)
        assert output.getvalue() == "Hello world\n"

    def test_print_empty_string(self, interp, output):
        interp.execute_statement("print('')")
        assert output.getvalue() == "\n"

    def test_print_int(self, interp, output):
        interp.execute_statement("print(1 + 2)")
        assert output.getvalue() == "3\n"

    def test_print_nothing(self, interp, output):
        """print() prints None."""
        interp.execute_statement("print()")
        assert output.getvalue() == "None\n"

    def test_print_function(self, interp, output):
        interp.execute_statement("print(print)")
        assert output.getvalue() == "Function\n"

    def test_print_print_result(self, interp, output):
        """print(print(1)) writes 1, then None."""
        interp.execute_statement("print(print(1))")
        assert output.getvalue() == "1\nNone\n"

    def test_print_assignment(self, interp, output):
        """print(x = 5) prints 5 and binds x."""
        interp.execute_statement("print(x = 5)")
        assert output.getvalue() == "5\n"
        assert interp.evaluate_expression("x") == int_val(5)


class TestCalls:
    """Test call semantics."""

    def test_argument_evaluated_before_callee_lookup(self, interp, output):
        """An undefined callee fails only after its argument has run."""
        with pytest.raises(UndefinedName) as exc_info:
            interp.execute_statement("undefined_fn(print(1))")
        assert output.getvalue() == "1\n"
        assert "'undefined_fn'" in exc_info.value.diagnostic.message

    def test_undefined_callee_with_empty_argument(self, interp):
        """undefined_fn() raises UndefinedName."""
        with pytest.raises(UndefinedName) as exc_info:
            interp.evaluate_expression("undefined_fn()")
        assert exc_info.value.diagnostic.code == "E301"
        assert "'undefined_fn'" in exc_info.value.diagnostic.message

    def test_alias_builtin(self, interp, output):
        """p = print makes p callable."""
        interp.execute_statement("p = print")
        interp.execute_statement('p("hi")')
        assert output.getvalue() == "hi\n"

    def test_shadow_builtin(self, interp):
        """print = 5 makes print(1) fail."""
        interp.execute_statement("print = 5")
        with pytest.raises(NotCallable) as exc_info:
            interp.execute_statement("print(1)")
        diag = exc_info.value.diagnostic
        assert diag.code == "E302"
        assert diag.span is not None

    def test_call_non_function_variable(self, interp):
        interp.execute_statement('s = "text"')
        with pytest.raises(NotCallable):
            interp.execute_statement("s(1)")


class TestLiteralRoundTrips:
    """Test that printed literals reproduce their source text."""

    @pytest.mark.parametrize("quote", ['"', "'"])
    @pytest.mark.parametrize("text", ["", "Hello world", "a + b", "x = 1", "f(1, 2)"])
    def test_string(self, interp, output, quote, text):
        """print(<quoted text>) writes the text unchanged in either quote style."""
        interp.execute_statement(f"print({quote}{text}{quote})")
        assert output.getvalue() == text + "\n"

    @pytest.mark.parametrize("number", [
        0, 42, -7,
        2 ** 64,
        2 ** 127 - 1,
        -2 ** 127,
    ])
    def test_integer(self, interp, output, number):
        """Integer literals stringify back to the same digits."""
        text = str(number)
        assert interp.evaluate_expression(text).stringify() == text
        interp.execute_statement(f"print({text})")
        assert output.getvalue() == text + "\n"


class TestLargeIntegers:
    """Test integers beyond the default str conversion limit."""

    def test_long_literal(self, interp, output):
        """A 5000-digit literal parses and prints exactly."""
        digits = "9" * 5000
        interp.execute_statement(f"print({digits})")
        assert output.getvalue() == digits + "\n"

    def test_long_negative_literal(self, interp):
        digits = "-" + "1" * 5000
        assert interp.evaluate_expression(digits).stringify() == digits

    def test_repeated_doubling(self, output):
        """Growing past 4300 digits by assignment alone does not fail."""
        source = "x = 1\n" + "x = x + x\n" * 15000
        interp = Interpreter(output=output)
        result = interp.run(source.splitlines())
        assert result.success
        assert interp.evaluate_expression("x") == int_val(2 ** 15000)
        assert output.getvalue() == ""

    def test_print_huge_sum(self, interp, output):
        """A sum too wide for str() still prints its full decimal text."""
        digits = "5" * 4500
        interp.execute_statement(f"x = {digits}")
        interp.execute_statement(f"print(x + {digits})")
        assert output.getvalue() == "1" + "1" * 4499 + "0\n"


class TestParseFailures:
    """Test that malformed statements raise ParseFailure."""

    @pytest.mark.parametrize("line", [
        "f(1, 2)",
        "1 - 2",
        "2 * 3",
        "1 +",
        "(1)",
        "x = ",
        'print("a"',
    ])
    def test_parse_failure(self, interp, output, line):
        with pytest.raises(ParseFailure):
            interp.execute_statement(line)
        assert output.getvalue() == ""

    def test_lexer_failure(self, interp):
        with pytest.raises(LexerError):
            interp.execute_statement("x = #")

    def test_failure_leaves_environment_unchanged(self, interp):
        """A statement that fails to parse binds nothing."""
        with pytest.raises(ParseFailure):
            interp.execute_statement("x = 1 +")
        assert not interp.environment.contains("x")


class TestEnvironment:
    """Test environment setup."""

    def test_print_preinstalled(self):
        ctx = create_context(output=io.StringIO())
        assert isinstance(ctx.get_variable("print"), FunctionValue)

    def test_separate_interpreters_are_isolated(self):
        a = Interpreter(output=io.StringIO())
        b = Interpreter(output=io.StringIO())
        a.execute_statement("x = 1")
        assert not b.environment.contains("x")

    def test_registry_install(self):
        lines = []
        env = Environment()
        registry = BuiltinRegistry(lines.append)
        registry.install(env)
        assert registry.get_function("print") is not None
        assert env.get("print").invoke(string_val("hey")) == none_val()
        assert lines == ["hey"]


class TestScripts:
    """Test whole-script execution."""

    def test_hello_script(self, output):
        """The canonical script prints its comment and values."""
        source = "\n".join([
            "// header",
            "print('')",
            'print("Hello world")',
            "x = 5",
            "print(x)",
        ])
        result = run_source(source, output=output)
        assert result.success
        assert result.statements_executed == 5
        assert output.getvalue() == "Comment: // header\n\nHello world\n5\n"

    def test_stops_at_first_error(self, output):
        """By default the first failure ends the run."""
        result = run_source("print(1)\nprint(y)\nprint(2)", output=output)
        assert not result.success
        assert result.statements_executed == 1
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].code == "E301"
        assert result.diagnostics[0].span.start.line == 2
        assert output.getvalue() == "1\n"

    def test_keep_going(self, output):
        """keep_going reports each failure and continues."""
        source = "print(a)\nprint(1)\n1 - 2\nprint(2)"
        result = run_source(source, output=output, keep_going=True)
        assert not result.success
        assert [d.code for d in result.diagnostics] == ["E301", "E103"]
        assert result.statements_executed == 2
        assert output.getvalue() == "1\n2\n"

    def test_keep_going_max_errors(self, output):
        """keep_going stops once max_errors is reached."""
        source = "a\nb\nc\nprint(1)"
        result = run_source(source, output=output, keep_going=True, max_errors=2)
        assert len(result.diagnostics) == 2
        assert output.getvalue() == ""

    def test_error_message(self, output):
        result = run_source("nope", output=output, filename="s.cog")
        assert result.error_message.startswith("s.cog:1:1: error[E301]")

    def test_run_file(self, tmp_path, output):
        path = tmp_path / "hello.cog"
        path.write_text("// greet\nx = 1 + 1\nprint(x)\n")
        result = run_file(path, output=output)
        assert result.success
        assert output.getvalue() == "Comment: // greet\n2\n"

    def test_run_file_diagnostic_names_file(self, tmp_path, output):
        path = tmp_path / "bad.cog"
        path.write_text("print(1)\nprint(1, 2)\n")
        result = run_file(path, output=output)
        diag = result.diagnostics[0]
        assert diag.code == "E104"
        assert diag.span.start.filename == str(path)
        assert diag.span.start.line == 2

    def test_only_newline_ends_a_statement(self, output):
        """Form feeds and other Unicode line breaks stay inside the line."""
        result = run_source("print(1)\x0cprint(2)\nprint(3)", output=output, keep_going=True)
        assert [d.code for d in result.diagnostics] == ["E001"]
        assert result.diagnostics[0].span.start.line == 1
        assert output.getvalue() == "3\n"

    def test_trailing_newline_adds_no_statement(self, output):
        result = run_source("print(1)\n", output=output)
        assert result.statements_executed == 1

    def test_source_and_file_agree(self, tmp_path):
        """The same bytes give the same lines through both entry points."""
        text = "print(1)\r\n\r\nx = 2 \nprint(3)\n"
        path = tmp_path / "same.cog"
        path.write_bytes(text.encode("utf-8"))

        from_text, from_file = io.StringIO(), io.StringIO()
        text_result = run_source(text, output=from_text, keep_going=True)
        file_result = run_file(path, output=from_file, keep_going=True)

        assert from_text.getvalue() == from_file.getvalue()
        assert text_result.statements_executed == file_result.statements_executed
        assert [(d.code, d.span.start.line) for d in text_result.diagnostics] == \
            [(d.code, d.span.start.line) for d in file_result.diagnostics]

    def test_run_file_missing(self, tmp_path):
        with pytest.raises(OSError):
            run_file(tmp_path / "missing.cog", output=io.StringIO())


class TestLogging:
    """Test interpreter logging."""

    def test_assignment_logged_at_debug(self, interp, caplog):
        with caplog.at_level(logging.DEBUG, logger="coglang"):
            interp.execute_statement("x = 5")
        assert "assign x (int)" in caplog.text
