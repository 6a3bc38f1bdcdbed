#!/usr/bin/env python3
"""
Command-line interface for the resume editor.

Every invocation restores the resume from local storage, applies one command,
and persists the result. AI commands call the configured hosted model
(LLM_PROVIDER) and fall back to safe values when it is unavailable.

Commands:
    show                                  - Print the resume (or its JSON document)
    personal                              - Show or set personal info fields
    add-/update-/remove-experience        - Edit the experience list
    add-/update-/remove-education         - Edit the education list
    add-/update-/remove-skill             - Edit the skills list
    jd                                    - Show, set or clear the target job description
    summary                               - Generate the professional summary
    improve                               - Rewrite one experience description
    analyze                               - Score the resume against the job description
    render                                - Print or write the rendered HTML
    export                                - Write a printable page and open it
    check                                 - Report advisory format issues
    reset                                 - Clear the resume
"""

import asyncio
import json
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Optional

import typer
from typing_extensions import Annotated

from hireme.contexts.analysis.client import AnalysisClient
from hireme.contexts.editing.resume_data_structure import ResumeData, SkillLevel
from hireme.contexts.editing.storage import DEFAULT_STORAGE_PATH
from hireme.contexts.editing.validation import validate_resume
from hireme.contexts.rendering.exporter import export_analysis_report
from hireme.contexts.templating.filters import format_date_range
from hireme.contexts.templating.renderer import DEFAULT_TEMPLATE, TemplateType
from hireme.shell import LOGS_PATH, AppShell, setup_shell_logger
from hireme.utils.errors import HireMeError
from hireme.utils.timestamp import now, today

app = typer.Typer(
    add_completion=False,
    help="Edit, preview, analyze and export a resume kept in local storage",
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    storage: Annotated[
        Path,
        typer.Option("--storage", help="Local storage file (default: HIREME_STORAGE_PATH)"),
    ] = DEFAULT_STORAGE_PATH,
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", help="LLM provider: gemini, openai or anthropic"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Echo info logs")] = False,
):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    setup_shell_logger(LOGS_PATH / f"session_{now()}", console_level="INFO" if verbose else "WARNING")

    shell, _ = AppShell.open(storage, client=AnalysisClient(provider_name=provider))
    ctx.obj = shell
    ctx.call_on_close(shell.close)


@contextmanager
def _cli_errors():
    """Turn editing/rendering errors into a message and exit code 1."""
    try:
        yield
    except (HireMeError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _given(**values) -> Dict[str, object]:
    """Drop options the user did not pass."""
    return {name: value for name, value in values.items() if value is not None}


def _format_resume(data: ResumeData) -> str:
    info = data.personal_info
    lines = [info.full_name or "(no name)"]
    contacts = [v for v in (info.email, info.phone, info.location, info.linkedin, info.portfolio) if v]
    if contacts:
        lines.append(" | ".join(contacts))
    if info.summary:
        lines += ["", info.summary]

    lines += ["", "Experience:"]
    for exp in data.experience:
        lines.append(f"  [{exp.id}] {exp.role} @ {exp.company} ({format_date_range(exp)})")
    lines += ["", "Education:"]
    for edu in data.education:
        lines.append(f"  [{edu.id}] {edu.degree}, {edu.school} {edu.year}".rstrip())
    lines += ["", "Skills:"]
    for skill in data.skills:
        lines.append(f"  [{skill.id}] {skill.name} ({skill.level.value})")

    jd = data.target_job_description
    lines += ["", f"Job description: {len(jd)} chars" if jd else "Job description: (none)"]
    return "\n".join(lines)


@app.command("show")
def show_command(
    ctx: typer.Context,
    as_json: Annotated[bool, typer.Option("--json", help="Print the stored JSON document")] = False,
):
    """Print the current resume."""
    shell: AppShell = ctx.obj
    if as_json:
        typer.echo(json.dumps(shell.data.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(_format_resume(shell.data))


@app.command("personal")
def personal_command(
    ctx: typer.Context,
    full_name: Annotated[Optional[str], typer.Option("--name")] = None,
    email: Annotated[Optional[str], typer.Option("--email")] = None,
    phone: Annotated[Optional[str], typer.Option("--phone")] = None,
    location: Annotated[Optional[str], typer.Option("--location")] = None,
    linkedin: Annotated[Optional[str], typer.Option("--linkedin")] = None,
    portfolio: Annotated[Optional[str], typer.Option("--portfolio")] = None,
    summary: Annotated[Optional[str], typer.Option("--summary")] = None,
):
    """
    Show or set personal info.

    Examples:\n

        $ hireme personal --name "Jane Doe" --email jane@example.com

        $ hireme personal            # Show current values
    """
    shell: AppShell = ctx.obj
    values = _given(
        full_name=full_name,
        email=email,
        phone=phone,
        location=location,
        linkedin=linkedin,
        portfolio=portfolio,
        summary=summary,
    )
    with _cli_errors():
        if values:
            shell.personal.set_many(values)
            typer.echo(f"✓ Updated {', '.join(sorted(values))}")
            return

    for name, value in vars(shell.personal.info).items():
        typer.echo(f"{name}: {value}")


# --- Experience ---


@app.command("add-experience")
def add_experience_command(
    ctx: typer.Context,
    role: Annotated[Optional[str], typer.Option("--role")] = None,
    company: Annotated[Optional[str], typer.Option("--company")] = None,
    start_date: Annotated[Optional[str], typer.Option("--start")] = None,
    end_date: Annotated[Optional[str], typer.Option("--end")] = None,
    current: Annotated[Optional[bool], typer.Option("--current/--not-current")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
):
    """Append an experience entry and print its id."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        item_id = shell.experience.add()
        values = _given(
            role=role,
            company=company,
            start_date=start_date,
            end_date=end_date,
            current=current,
            description=description,
        )
        if values:
            shell.experience.update_many(item_id, values)
    typer.echo(item_id)


@app.command("update-experience")
def update_experience_command(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Experience id")],
    role: Annotated[Optional[str], typer.Option("--role")] = None,
    company: Annotated[Optional[str], typer.Option("--company")] = None,
    start_date: Annotated[Optional[str], typer.Option("--start")] = None,
    end_date: Annotated[Optional[str], typer.Option("--end")] = None,
    current: Annotated[Optional[bool], typer.Option("--current/--not-current")] = None,
    description: Annotated[Optional[str], typer.Option("--description")] = None,
):
    """Change fields of one experience entry."""
    shell: AppShell = ctx.obj
    values = _given(
        role=role,
        company=company,
        start_date=start_date,
        end_date=end_date,
        current=current,
        description=description,
    )
    with _cli_errors():
        shell.experience.update_many(item_id, values)
    typer.echo(f"✓ Updated experience {item_id}")


@app.command("remove-experience")
def remove_experience_command(
    ctx: typer.Context, item_id: Annotated[str, typer.Argument(help="Experience id")]
):
    """Remove one experience entry."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.experience.remove(item_id)
    typer.echo(f"✓ Removed experience {item_id}")


# --- Education ---


@app.command("add-education")
def add_education_command(
    ctx: typer.Context,
    degree: Annotated[Optional[str], typer.Option("--degree")] = None,
    school: Annotated[Optional[str], typer.Option("--school")] = None,
    year: Annotated[Optional[str], typer.Option("--year")] = None,
):
    """Append an education entry and print its id."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        item_id = shell.education.add()
        values = _given(degree=degree, school=school, year=year)
        if values:
            shell.education.update_many(item_id, values)
    typer.echo(item_id)


@app.command("update-education")
def update_education_command(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Education id")],
    degree: Annotated[Optional[str], typer.Option("--degree")] = None,
    school: Annotated[Optional[str], typer.Option("--school")] = None,
    year: Annotated[Optional[str], typer.Option("--year")] = None,
):
    """Change fields of one education entry."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.education.update_many(item_id, _given(degree=degree, school=school, year=year))
    typer.echo(f"✓ Updated education {item_id}")


@app.command("remove-education")
def remove_education_command(
    ctx: typer.Context, item_id: Annotated[str, typer.Argument(help="Education id")]
):
    """Remove one education entry."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.education.remove(item_id)
    typer.echo(f"✓ Removed education {item_id}")


# --- Skills ---


@app.command("add-skill")
def add_skill_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Skill name")] = "",
    level: Annotated[SkillLevel, typer.Option("--level")] = SkillLevel.INTERMEDIATE,
):
    """Append a skill and print its id."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        item_id = shell.skills.add()
        shell.skills.update_many(item_id, {"name": name, "level": level})
    typer.echo(item_id)


@app.command("update-skill")
def update_skill_command(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Skill id")],
    name: Annotated[Optional[str], typer.Option("--name")] = None,
    level: Annotated[Optional[SkillLevel], typer.Option("--level")] = None,
):
    """Change the name or level of one skill."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.skills.update_many(item_id, _given(name=name, level=level))
    typer.echo(f"✓ Updated skill {item_id}")


@app.command("remove-skill")
def remove_skill_command(
    ctx: typer.Context, item_id: Annotated[str, typer.Argument(help="Skill id")]
):
    """Remove one skill."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.skills.remove(item_id)
    typer.echo(f"✓ Removed skill {item_id}")


# --- Job description ---


@app.command("jd")
def job_description_command(
    ctx: typer.Context,
    text: Annotated[Optional[str], typer.Argument(help="Job description text")] = None,
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Read the job description from a file", exists=True, dir_okay=False),
    ] = None,
    clear: Annotated[bool, typer.Option("--clear", help="Clear the job description")] = False,
):
    """Show, set or clear the target job description."""
    shell: AppShell = ctx.obj
    if sum(option is not None and option is not False for option in (text, file, clear)) > 1:
        typer.echo("Error: Use only one of TEXT, --file and --clear", err=True)
        raise typer.Exit(code=1)

    if clear:
        shell.job_description.set("")
        typer.echo("✓ Cleared job description")
    elif file is not None:
        shell.job_description.set(file.read_text(encoding="utf-8"))
        typer.echo(f"✓ Loaded job description from {file.name}")
    elif text is not None:
        shell.job_description.set(text)
        typer.echo("✓ Updated job description")
    else:
        typer.echo(shell.job_description.text or "(no job description)")


# --- AI actions ---


@app.command("summary")
def summary_command(ctx: typer.Context):
    """Generate the professional summary from experience, skills and job description."""
    shell: AppShell = ctx.obj
    summary = asyncio.run(shell.personal.generate_summary())
    typer.echo(summary)


@app.command("improve")
def improve_command(
    ctx: typer.Context, item_id: Annotated[str, typer.Argument(help="Experience id")]
):
    """Rewrite one experience description with action verbs and quantified results."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        if not shell.experience.get(item_id).description:
            typer.echo("Error: Experience has no description to improve", err=True)
            raise typer.Exit(code=1)
        improved = asyncio.run(shell.experience.improve_description(item_id))
    typer.echo(improved)


@app.command("analyze")
def analyze_command(
    ctx: typer.Context,
    report: Annotated[
        Optional[Path], typer.Option("--report", help="Also write the report as an HTML page")
    ] = None,
):
    """Score the resume against the target job description."""
    shell: AppShell = ctx.obj
    if not shell.can_analyze:
        typer.echo("Error: Add a job description first (hireme jd ...)", err=True)
        raise typer.Exit(code=1)

    result = asyncio.run(shell.run_analysis())

    typer.secho(f"\nMatch score: {result.score}", bold=True)
    typer.echo(f"ATS compatibility: {result.ats_compatibility}")
    typer.echo(f"Matched keywords: {', '.join(result.keyword_matches) or 'No specific keywords matched.'}")
    typer.echo(f"Missing keywords: {', '.join(result.missing_keywords) or 'Great job! You covered key terms.'}")
    typer.echo(f"\n{result.suggestions}")

    if report is not None:
        export = export_analysis_report(result, report, registry=shell.registry)
        if not export.success:
            typer.echo(f"Error: {export.error}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"\n✓ Report written to {export.output_path}")

    if result.is_error:
        raise typer.Exit(code=1)


# --- Output ---


@app.command("render")
def render_command(
    ctx: typer.Context,
    template: Annotated[TemplateType, typer.Option("--template", "-t")] = DEFAULT_TEMPLATE,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the fragment to a file")
    ] = None,
):
    """Render the resume as an HTML fragment."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.select_template(template)
        html = shell.render_preview()

    if output is None:
        typer.echo(html)
    else:
        output.write_text(html, encoding="utf-8")
        typer.echo(f"✓ Wrote {output}")


@app.command("export")
def export_command(
    ctx: typer.Context,
    template: Annotated[TemplateType, typer.Option("--template", "-t")] = DEFAULT_TEMPLATE,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Page to write (default: resume_<date>.html)")
    ] = None,
    open_browser: Annotated[
        bool, typer.Option("--open/--no-open", help="Open the page for printing")
    ] = True,
):
    """Write a printable page; print it to PDF from the browser."""
    shell: AppShell = ctx.obj
    with _cli_errors():
        shell.select_template(template)
        result = shell.export(output or Path(f"resume_{today()}.html"), open_browser=open_browser)

    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"✓ Exported {result.template} resume to {result.output_path}")


@app.command("check")
def check_command(ctx: typer.Context):
    """Report advisory format issues. Nothing is rejected or changed."""
    shell: AppShell = ctx.obj
    issues = validate_resume(shell.data)
    if not issues:
        typer.echo("✓ No issues found")
        return
    for issue in issues:
        typer.echo(f"⚠ {issue}")


@app.command("reset")
def reset_command(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Clear every field of the resume."""
    shell: AppShell = ctx.obj
    if not yes and not typer.confirm("Clear the whole resume?"):
        raise typer.Exit()
    shell.reset()
    typer.echo("✓ Resume cleared")


if __name__ == "__main__":
    app()
