from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.services.base import SingletonService


class Renderer(SingletonService):
    """Jinja2 renderer for the transactional email templates."""

    _env: Environment | None = None

    @classmethod
    def initialize(cls, template_dir: str) -> None:
        """
        Initializes the template environment for rendering templates.

        HTML templates are autoescaped; the plain text variants are not.
        Rendering is asynchronous.

        Args:
            template_dir (str): The directory containing the template files.
        """
        cls._env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(enabled_extensions=("html",)),
            enable_async=True,
        )
        cls._initialized = True

    @classmethod
    async def render_template(cls, template_name: str, context: dict | None = None) -> str:
        """
        Renders an asynchronous template with the given context.

        Args:
            template_name (str): The name of the template to be rendered.
            context (dict | None): Context data passed to the template.

        Returns:
            str: The rendered template as a string.

        Raises:
            TemplateNotFound: If the specified template cannot be found.
            TemplateError: If an error occurs during template rendering.
            RuntimeError: If the renderer has not been initialized.
        """
        cls._require_initialized()
        template = cls._env.get_template(template_name)
        return await template.render_async(**(context or {}))

    @classmethod
    def _reset(cls) -> None:
        cls._env = None
        super()._reset()
