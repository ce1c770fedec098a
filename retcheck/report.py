import functools
import re
import sys
import textwrap
import typing

import colorama     # type: ignore

from retcheck.inspection import Problem


def make_red(string: str) -> str:
    red_begins = typing.cast(str, colorama.Fore.RED)
    red_ends = typing.cast(str, colorama.Fore.RESET)
    return red_begins + string + red_ends


@functools.lru_cache(maxsize=None)
def _init_colorama() -> None:
    colorama.init()


def _no_color(string: str) -> str:
    return string


def print_problem(
        problem: Problem,
        red_function: typing.Callable[[str], str],
        file: typing.TextIO) -> None:
    eprint = functools.partial(print, file=file)
    eprint("warning in %s: %s [%s]" % (
        problem.location.get_line_column_string(), problem.message,
        problem.short_name))

    try:
        before, bad_code, after = problem.location.get_source()
    except OSError:
        return

    if bad_code.isspace():
        # make whitespace visible
        replacement = '\N{lower one quarter block}'
        bad_code = re.sub(r'[^\S\n]', replacement,
                          bad_code.replace('\t', ' ' * 4))
        bad_code = bad_code.replace('\n', replacement * 3 + '\n')

    eprint()
    eprint(textwrap.indent(before + red_function(bad_code) + after, ' ' * 4))


def print_problems(
        problems: typing.Iterable[Problem],
        color: str = 'auto',
        file: typing.Optional[typing.TextIO] = None) -> None:
    """Print problems to stderr or the given file.

    The color argument should be 'auto', 'always' or 'never'. With 'auto',
    colors are used if the output goes to a terminal.
    """
    if file is None:
        file = sys.stderr

    color_dict = {
        'always': True,
        'never': False,
        'auto': file.isatty(),
    }
    if color not in color_dict:
        raise ValueError(
            "color should be 'auto', 'always' or 'never', not %r" % (color,))

    if color_dict[color]:
        _init_colorama()
        red_function = make_red
    else:
        red_function = _no_color

    for problem in problems:
        print_problem(problem, red_function, file)
