#!/usr/bin/env python3
"""
Command-line interface for HERALD.

Commands:
    serve     - Run the HTTP API with uvicorn
    templates - List the templates of a content type
    generate  - Generate one cover letter, email, or message from text files
"""

from pathlib import Path
from typing import Optional

import typer

from herald import __version__
from herald.contexts.generation.pipeline import GenerationPipeline
from herald.contexts.generation.providers import get_provider
from herald.contexts.intake.generation_request import GenerationRequest, PersonalInfo
from herald.contexts.templating.template_registry import ContentType, get_registry
from herald.utils.config import load_config
from herald.utils.exceptions import HeraldError
from herald.utils.logger import setup_logger

app = typer.Typer(
    add_completion=False,
    help="Generate tailored cover letters, application emails, and recruiter messages",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _check_content_type(content_type: str) -> str:
    if content_type not in ContentType.ALL:
        typer.secho(
            f"Unknown content type '{content_type}'. Use one of: {', '.join(ContentType.ALL)}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=2)
    return content_type


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """
    Run the HTTP API.

    Examples:\n

        $ herald serve --port 8080
    """
    import uvicorn

    typer.secho(f"HERALD {__version__} on http://{host}:{port}", fg=typer.colors.BLUE, bold=True)
    uvicorn.run(
        "herald.contexts.delivery.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command("templates")
def templates_command(
    content_type: str = typer.Argument(..., help="cover-letter, email, or message"),
):
    """
    List the templates available for a content type.

    Examples:\n

        $ herald templates email
    """
    _check_content_type(content_type)
    registry = get_registry()
    default_id = registry.get_default(content_type).id

    typer.secho(f"\n{content_type} templates", fg=typer.colors.BLUE, bold=True)
    for template in registry.list_templates(content_type):
        marker = " (default)" if template.id == default_id else ""
        typer.echo(f"  {template.id:<15} {template.name} [{template.language}]{marker}")
        typer.echo(f"  {'':<15} tone: {template.tone}")


@app.command("generate")
def generate_command(
    content_type: str = typer.Argument(..., help="cover-letter, email, or message"),
    resume: Path = typer.Option(..., "--resume", "-r", exists=True, dir_okay=False, help="Resume text file"),
    job: Path = typer.Option(..., "--job", "-j", exists=True, dir_okay=False, help="Job description text file"),
    template_id: Optional[str] = typer.Option(None, "--template", "-t", help="Template id (default: catalog default)"),
    name: Optional[str] = typer.Option(None, "--name", help="Your name (required for email/message)"),
    phone: Optional[str] = typer.Option(None, "--phone"),
    email: Optional[str] = typer.Option(None, "--email"),
    linkedin: Optional[str] = typer.Option(None, "--linkedin"),
    github: Optional[str] = typer.Option(None, "--github"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="english or hebrew (email only)"),
    instructions: Optional[str] = typer.Option(None, "--instructions", help="Additional instructions"),
    provider_name: Optional[str] = typer.Option(None, "--provider", help="gemini, openai, or mistral"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here instead of stdout"),
):
    """
    Generate one piece of content with the configured provider.

    Examples:\n

        $ herald generate cover-letter -r resume.txt -j job.txt -t technical

        $ herald generate email -r resume.txt -j job.txt --name Dana -l hebrew
    """
    _check_content_type(content_type)
    try:
        config = load_config(overrides={"llm_provider": provider_name} if provider_name else None)
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    setup_logger("cli", log_dir=Path(config.log_dir) if config.log_dir else None, level="WARNING")

    personal_info = None
    if any([name, phone, email, linkedin, github]):
        personal_info = PersonalInfo(name=name, phone=phone, email=email, linkedin=linkedin, github=github)

    request = GenerationRequest(
        resume_content=resume.read_text(encoding="utf-8"),
        job_description=job.read_text(encoding="utf-8"),
        template_id=template_id,
        additional_instructions=instructions,
        personal_info=personal_info,
        language=language,
    )

    try:
        provider = get_provider(config.llm_provider, config.llm_model, config.provider_timeout_s)
        pipeline = GenerationPipeline(provider)
        result = pipeline.run(content_type, request, client_key="cli")
    except (HeraldError, ValueError) as e:
        typer.secho(f"Error: {getattr(e, 'message', e)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output:
        output.write_text(result.text + "\n", encoding="utf-8")
        typer.secho(f"✓ Wrote {result.metadata.word_count} words to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(result.text)

    typer.secho(
        f"\ntemplate: {result.metadata.template_used} | words: {result.metadata.word_count}"
        + (f" | language: {result.metadata.language}" if result.metadata.language else ""),
        fg=typer.colors.BLUE,
        err=True,
    )


if __name__ == "__main__":
    app()
