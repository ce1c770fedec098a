import typing

import attr

from retcheck import common, exitpoints, flow
from retcheck.objects import Body, Subject
from retcheck.returnstatus import ReturnStatus, get_return_status


@attr.s(auto_attribs=True, frozen=True)
class Problem:
    location: common.Location
    message: str
    short_name: str


class ProblemsHolder:

    def __init__(self, messager: common.Messager):
        self.messager = messager
        self.problems: typing.List[Problem] = []

    def register_problem(self, problem: Problem) -> None:
        file_messager = self.messager.with_prefix(
            common.path_string(problem.location.source_file.path))
        file_messager(1, "found a problem at offset %d: %s" % (
            problem.location.offset, problem.message))
        self.problems.append(problem)


@attr.s(auto_attribs=True, frozen=True)
class Inspection:
    short_name: str = 'MissingReturnStatement'
    display_name: str = 'Missing return statement'
    group_path: typing.Tuple[str, ...] = ('Data flow issues',)
    enabled_by_default: bool = True
    message: str = 'Not all execution paths return a value'

    def add_no_return_message(
            self, body: Body, holder: ProblemsHolder) -> None:
        """Put a problem at the end of the body, if there's a good place."""
        last_child = body.get_last_child()
        if last_child is None:
            return

        if not last_child.valid or not last_child.is_physical:
            return

        location = last_child.location
        assert location is not None
        if location.is_empty():
            return

        holder.register_problem(
            Problem(location, self.message, self.short_name))

    def check_body(
            self,
            body: Body,
            status: ReturnStatus,
            holder: ProblemsHolder) -> None:
        missing = exitpoints.body_misses_some_returns(body.root_node, status)
        holder.messager(3, "%s, %s" % (
            status.name.lower().replace('_', ' '),
            "something is missing" if missing else "ok"))
        if missing:
            self.add_no_return_message(body, holder)

    def check_subject(
            self,
            subject: Subject,
            holder: ProblemsHolder) -> None:
        """Check the subject and all closures inside it.

        Inner closures are checked before the subject that contains them.
        """
        if subject.body is None:
            holder.messager(2, "skipping %r, it has no body" % subject)
            return

        for closure in flow.find_closures(subject.body.root_node):
            self.check_subject(closure, holder)

        with holder.messager.indented(2, "checking %r" % subject):
            self.check_body(subject.body, get_return_status(subject), holder)


DEFAULT_INSPECTION = Inspection()


def check_subjects(
        subjects: typing.Iterable[Subject],
        messager: common.Messager,
        inspection: Inspection = DEFAULT_INSPECTION,
) -> typing.List[Problem]:
    # messager.indented() is not thread safe, give each thread a messager
    holder = ProblemsHolder(messager)
    for subject in subjects:
        inspection.check_subject(subject, holder)
    return holder.problems
