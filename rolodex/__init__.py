from typing import Any, Mapping, Optional

from flask import Flask, flash, redirect, render_template, request, url_for
from loguru import logger

from .catalog import CatalogView, RecipeCatalog
from .commands import register_commands
from .config import load_config
from .errors import EmptyCatalogError, StoreUnavailable
from .log import configure_logging
from .memory_storage import InMemoryDocumentStore
from .models import PLACEHOLDER_IMAGE, Recipe, RecipeDraft
from .repository import RecipeRepository
from .storage import DocumentStore

try:
    from .gcp_storage import FirestoreDocumentStore
except ImportError:  # pragma: no cover - allows running tests without optional deps
    FirestoreDocumentStore = None  # type: ignore[assignment,misc]

ADD_FAILED_MESSAGE = "Failed to add recipe. Please try again later."


def create_app(
    storage: Optional[DocumentStore] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional document store. When ``None`` the backend named by the
        ``RECIPE_STORE`` setting is built: Firestore (the default) or the
        in-memory store, seeded from ``RECIPE_SEED_FILE`` when set.
    config:
        Settings that override the ones read from the environment.
    """

    app = Flask(__name__)
    app.config.setdefault("MAX_CONTENT_LENGTH", 1024 * 1024)
    app.config.from_mapping(load_config())
    if config:
        app.config.from_mapping(config)

    configure_logging(app.config["LOG_LEVEL"])

    if storage is None:
        storage = _build_storage(app.config)
    repository = RecipeRepository(storage, collection_name=app.config["RECIPES_COLLECTION"])

    app.config["RECIPE_STORAGE"] = storage
    app.config["RECIPE_REPOSITORY"] = repository
    app.config["RECIPE_CATALOG"] = RecipeCatalog(repository)

    register_commands(app)

    @app.context_processor
    def inject_placeholder() -> dict:
        return {"placeholder_image": url_for("static", filename=PLACEHOLDER_IMAGE)}

    def render_index(view: CatalogView) -> str:
        return render_template("index.html", view=view, title="Recipe Rolodex")

    def render_form(draft: RecipeDraft, errors: Optional[list] = None, status: int = 200):
        page = render_template(
            "add_recipe.html", draft=draft, errors=errors or [], title="Add a New Recipe"
        )
        return page, status

    @app.get("/")
    def index() -> str:
        catalog: RecipeCatalog = app.config["RECIPE_CATALOG"]
        return render_index(catalog.view(request.args.get("q", "")))

    @app.get("/random")
    def random_recipe():
        catalog: RecipeCatalog = app.config["RECIPE_CATALOG"]
        search_term = request.args.get("q", "")

        try:
            view = catalog.view(search_term, random_pick=True)
        except EmptyCatalogError:
            flash("There are no recipes to pick from yet.", "error")
            return redirect(url_for("index", q=search_term or None))

        return render_index(view)

    @app.get("/recipes/new")
    def new_recipe():
        return render_form(RecipeDraft())

    @app.post("/recipes")
    def create_recipe():
        repository: RecipeRepository = app.config["RECIPE_REPOSITORY"]
        draft = RecipeDraft.from_form(request.form)
        action = request.form.get("action", "submit")

        if "remove_tag" in request.form:
            draft.remove_tag(request.form["remove_tag"])
            return render_form(draft)

        if action == "add_tag":
            draft.commit_tag()
            return render_form(draft)

        errors = draft.validate()
        if errors:
            return render_form(draft, errors, status=400)

        try:
            new_recipe = repository.add(draft)
        except StoreUnavailable:
            return render_form(draft, [ADD_FAILED_MESSAGE], status=503)

        flash(f"Recipe '{new_recipe.display_name}' saved.", "success")
        return redirect(url_for("index"))

    @app.post("/recipes/<recipe_id>/delete")
    def delete_recipe(recipe_id: str):
        repository: RecipeRepository = app.config["RECIPE_REPOSITORY"]
        try:
            repository.delete_by_id(recipe_id)
        except StoreUnavailable:
            # Logged by the repository; the list reloads unchanged.
            pass
        else:
            flash("Recipe deleted.", "success")
        return redirect(url_for("index"))

    return app


def _build_storage(config: Mapping[str, Any]) -> DocumentStore:
    backend = config["RECIPE_STORE"]

    if backend == "memory":
        seed_file = config.get("RECIPE_SEED_FILE")
        if seed_file:
            return InMemoryDocumentStore.from_seed_file(
                seed_file, seed_collection=config["RECIPES_COLLECTION"]
            )
        logger.warning("Using an empty in-memory recipe store; data is lost on restart")
        return InMemoryDocumentStore()

    if backend == "firestore":
        if FirestoreDocumentStore is None:
            raise RuntimeError(
                "google-cloud-firestore is not installed. Install it, set "
                "RECIPE_STORE=memory, or pass an explicit storage backend to create_app."
            )
        return FirestoreDocumentStore(project=config.get("GCP_PROJECT"))

    raise RuntimeError(f"Unknown RECIPE_STORE '{backend}'. Expected 'firestore' or 'memory'.")


__all__ = ["create_app", "Recipe", "RecipeDraft"]
