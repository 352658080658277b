"""Step definitions for application tracking BDD scenarios."""
from __future__ import annotations

import asyncio
from datetime import timedelta

from pytest_bdd import given, parsers, scenarios, then, when

from domain.models import ApplicationStatus, ApplicationUpdate, ImportRecord

from .conftest import TrackerContext

scenarios("../features/application_tracking.feature")


# -- Given -----------------------------------------------------------------

@given(parsers.re(r'the user "(?P<owner>[^"]+)" tracks the position "(?P<position>[^"]+)" at "(?P<company>[^"]+)"'))
def given_other_user_application(ctx: TrackerContext, owner: str, position: str, company: str) -> None:
    app = asyncio.run(ctx.use_cases().create_application.execute(owner, company, position))
    ctx.last_application_id = app.id


@given(
    parsers.re(
        r'an import row for "(?P<company>[^"]*)" as "(?P<position>[^"]*)" '
        r'with status "(?P<status>[^"]*)"'
    )
)
def given_import_row(ctx: TrackerContext, company: str, position: str, status: str) -> None:
    ctx.import_rows.append(
        ImportRecord(company=company or None, position=position or None, status=status or None)
    )


@given(parsers.parse('they applied to "{company}" {days:d} days ago'))
def given_applied_days_ago(ctx: TrackerContext, company: str, days: int) -> None:
    applied = (ctx.clock.now() - timedelta(days=days)).date()
    app = asyncio.run(
        ctx.use_cases().create_application.execute(
            ctx.user_id,
            company,
            "Engineer",
            status=ApplicationStatus.APPLIED,
            applied_date=applied,
        )
    )
    ctx.last_application_id = app.id


# -- When ------------------------------------------------------------------

@when(parsers.parse('they change its status to "{status}"'))
def when_change_status(ctx: TrackerContext, status: str) -> None:
    ctx.run(
        ctx.use_cases().update_application.execute(
            ctx.last_application_id,
            ctx.user_id,
            ApplicationUpdate(status=ApplicationStatus(status)),
        )
    )


@when("they import the rows")
def when_import(ctx: TrackerContext) -> None:
    ctx.run(ctx.use_cases().import_applications.execute(ctx.user_id, ctx.import_rows))


@when("they check their notifications")
def when_check_notifications(ctx: TrackerContext) -> None:
    ctx.run(ctx.use_cases().get_notifications.execute(ctx.user_id))


@when("they record a follow-up")
def when_follow_up(ctx: TrackerContext) -> None:
    ctx.run(ctx.use_cases().mark_followed_up.execute(ctx.last_application_id, ctx.user_id))


# -- Then ------------------------------------------------------------------

@then(
    parsers.parse(
        'their applications list shows "{company}" as "{position}" with status "{status}"'
    )
)
def then_listed(ctx: TrackerContext, company: str, position: str, status: str) -> None:
    apps = asyncio.run(ctx.use_cases().get_applications.execute(ctx.user_id))
    assert [(a.company, a.position, a.status.value) for a in apps] == [(company, position, status)]


@then(parsers.parse("{count:d} applications are imported"))
def then_imported_count(ctx: TrackerContext, count: int) -> None:
    assert ctx.error is None
    assert len(ctx.result.imported) == count
    assert len(ctx.applications.create_many_calls) == 1


@then(parsers.parse('row {index:d} is reported with "{message}"'))
def then_row_error(ctx: TrackerContext, index: int, message: str) -> None:
    assert [(e.index, e.error) for e in ctx.result.errors] == [(index, message)]


@then(parsers.parse('"{company}" is imported with status "{status}"'))
def then_imported_status(ctx: TrackerContext, company: str, status: str) -> None:
    imported = {a.company: a.status.value for a in ctx.result.imported}
    assert imported[company] == status


@then(parsers.parse('a "{kind}" notification says "{message}"'))
def then_notification(ctx: TrackerContext, kind: str, message: str) -> None:
    assert [(n.type.value, n.message) for n in ctx.result] == [(kind, message)]


@then("there are no notifications")
def then_no_notifications(ctx: TrackerContext) -> None:
    assert ctx.error is None
    assert ctx.result == []
