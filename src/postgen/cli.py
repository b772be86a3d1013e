import typer
import json
import mimetypes
from pathlib import Path
from typing import List, Optional
import logging
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.panel import Panel

from .file_utils import UploadedFile
from .llm_service import GenerationError, get_llm_service
from .models import PostType, ProjectType
from .processing_service import PostProcessingService, UploadValidationError
from .prompt_manager import PromptError, PromptManager

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize Typer app
app = typer.Typer(
    name="postgen",
    help="Generate social media posts from a client questionnaire and room visualizations",
    add_completion=False
)

# Initialize console for rich output
console = Console()

def read_upload(path: Path) -> UploadedFile:
    content_type, _ = mimetypes.guess_type(path.name)
    return UploadedFile(name=path.name, content_type=content_type or "", content=path.read_bytes())

@app.command()
def generate(
    pdf_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Client questionnaire PDF"),
    image_paths: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="3-10 room visualizations"),
    post_type: PostType = typer.Option(PostType.FB_IG, "--post-type", "-t", help="Kind of post to write"),
    project_type: ProjectType = typer.Option(ProjectType.MROOMYGO, "--project-type", "-p", help="Design package"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
):
    """Generate a post from local files"""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console
        ) as progress:
            task = progress.add_task("Reading files...", total=None)

            pdf = read_upload(pdf_path)
            images = [read_upload(path) for path in image_paths]

            progress.update(task, description="Generating post...")

            service = PostProcessingService()
            response = service.generate_from_uploads(pdf, images, post_type, project_type)

    except UploadValidationError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(1)
    except (GenerationError, PromptError) as e:
        console.print(f"[red]Error generating post: {str(e)}[/red]")
        raise typer.Exit(1)

    console.print(Panel(response.post, title="Treść posta", border_style="green"))
    display_photo_order(response.photo_items)
    console.print(
        f"[dim]Tokens: {response.usage.prompt_tokens} in / "
        f"{response.usage.completion_tokens} out / {response.usage.total_tokens} total[/dim]"
    )

    if output:
        data = response.model_dump(mode="json", exclude={"thumbnails"})
        output.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"[green]✓ Result saved to: {output}[/green]")

def display_photo_order(photo_items):
    """Display the suggested photo order"""
    if not photo_items:
        console.print("[yellow]No suggested photo order in the response[/yellow]")
        return

    table = Table(title="Sugerowana kolejność zdjęć")
    table.add_column("#", style="cyan")
    table.add_column("Position", style="magenta")
    table.add_column("Description")

    for i, item in enumerate(photo_items, 1):
        table.add_row(str(i), str(item.position), item.description)

    console.print(table)

@app.command()
def prompts():
    """List available prompt templates"""
    table = Table(title="Prompts")
    table.add_column("File", style="cyan")
    table.add_column("Title", style="magenta")
    table.add_column("Description")

    for prompt in PromptManager().get_available_prompts():
        table.add_row(prompt.filename, prompt.title, prompt.description)

    console.print(table)

@app.command()
def show_prompt(
    post_type: PostType = typer.Argument(..., help="Post type of the template")
):
    """Print a prompt template"""
    try:
        content = PromptManager().load_prompt_by_type(post_type)
    except PromptError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(1)

    console.print(Panel(content, title=f"{post_type.value}.txt"))

@app.command()
def test_connection():
    """Check that the Anthropic API answers"""
    if get_llm_service().test_connection():
        console.print("[green]✓ Anthropic API is reachable[/green]")
    else:
        console.print("[red]✗ Anthropic API test failed[/red]")
        raise typer.Exit(1)

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Host to bind the server to"),
    port: int = typer.Option(8000, "--port", help="Port to bind the server to")
):
    """Start the FastAPI server"""

    console.print(f"[green]Starting server on {host}:{port}[/green]")

    import uvicorn
    uvicorn.run("src.postgen.api:app", host=host, port=port, reload=True)

if __name__ == "__main__":
    app()
