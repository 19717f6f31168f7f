import pytest

from riptide.assembler import ComponentAssembler, ComponentDescriptor, Variant, assemble
from riptide.config import Settings
from riptide.handlers import create_default_registry
from riptide.tasks import TaskHandlerRegistry
from riptide.templates import ParsedTemplate


class CountingTasks:
    def __init__(self, names):
        self.names = list(names)
        self.calls = 0

    def known_task_handlers(self):
        self.calls += 1
        return self.names


class BindingParser:
    """One "item" template per file, with a click binding."""

    def parse(self, markup, template_path_key):
        return {f"{template_path_key}/item": ParsedTemplate(markup=markup, bindings={"click": ["onClick"]})}


def server(root, name="blog"):
    return ComponentDescriptor(root_path=str(root), name=name, variant=Variant.SERVER)


def client(root, name="blog"):
    return ComponentDescriptor(root_path=str(root), name=name, variant=Variant.CLIENT)


def test_full_server_output(full_component):
    assembler = ComponentAssembler(tasks=TaskHandlerRegistry.from_names(["Blog::PublishTask"]))

    code = assembler.assemble(server(full_component))

    assert code == (
        "$page.add_routes do\n"
        "\n"
        "get '/posts', _controller: 'posts'\n"
        "end\n"
        "\n"
        '$page.add_template("blog/posts/index/index/body", "<h1>Posts</h1>", {})\n'
        '$page.add_template("blog/posts/show/show/body", "<h1>Post</h1>", {})\n'
        "class PostsController; end\n"
        "\n"
        "class Post; end\n"
        "\n"
        "module Blog\n"
        "class PublishTask < Volt::Task; end\n"
        "end\n"
        "require 'blog/config/initializers/setup'\n"
        "require 'blog/config/initializers/client/boot'"
    )


def test_kind_order_in_server_output(full_component):
    code = ComponentAssembler(tasks=TaskHandlerRegistry.from_names(["Blog::PublishTask"])).assemble(
        server(full_component)
    )

    markers = [
        "add_routes",
        "add_template",
        "class PostsController",
        "class Post;",
        "class PublishTask",
        "require 'blog/config/initializers/setup'",
    ]
    positions = [code.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_client_output_is_routes_and_views_prefix_of_server(full_component):
    # Same page reference so the shared prefix is byte-identical.
    settings = Settings(client_page_reference="page", server_page_reference="page")
    assembler = ComponentAssembler(tasks=TaskHandlerRegistry.from_names(["Job"]), settings=settings)

    client_code = assembler.assemble(client(full_component))
    server_code = assembler.assemble(server(full_component))

    assert server_code.startswith(client_code)
    assert "class PostsController" not in client_code
    assert "require" not in client_code
    assert "class PostsController" in server_code[len(client_code):]


def test_client_variant_uses_client_page_reference(full_component):
    code = ComponentAssembler().assemble(client(full_component))

    assert code.startswith("page.add_routes do\n")
    assert 'page.add_template("blog/posts/index/index/body"' in code


@pytest.mark.parametrize(
    ("variant", "expected_reference"),
    [(Variant.SERVER, "$page"), (Variant.CLIENT, "page")],
)
def test_default_page_reference_per_variant(full_component, variant, expected_reference):
    descriptor = ComponentDescriptor(root_path=str(full_component), name="blog", variant=variant)

    code = ComponentAssembler().assemble(descriptor)

    assert ComponentAssembler().page_reference(variant) == expected_reference
    assert code.startswith(f"{expected_reference}.add_routes do\n")
    assert f"\n{expected_reference}.add_template(" in code


def test_task_registry_only_queried_for_server(full_component):
    tasks = CountingTasks(["Job"])
    assembler = ComponentAssembler(tasks=tasks)

    assembler.assemble(client(full_component))
    assert tasks.calls == 0

    assembler.assemble(server(full_component))
    assert tasks.calls == 1


def test_assembly_is_deterministic(full_component, make_file):
    make_file("views/archive/list/list.html", "<ul></ul>")
    make_file("models/comment.rb", "class Comment; end")
    assembler = ComponentAssembler(parser=BindingParser())

    assert assembler.assemble(server(full_component)) == assembler.assemble(server(full_component))


def test_implicit_controller_without_file_emits_nothing(component, make_file):
    make_file("views/widgets/show/show.html", "<p></p>")

    code = ComponentAssembler().assemble(server(component))

    assert code == '$page.add_template("blog/widgets/show/show/body", "<p></p>", {})\n'


def test_existing_controller_emitted_once(component, make_file):
    make_file("views/widgets/show/show.html", "<p></p>")
    make_file("controllers/widgets_controller.rb", "X")

    code = ComponentAssembler().assemble(server(component))

    assert code.count("X") == 1
    assert code.endswith("X\n\n")


def test_unknown_extension_does_not_abort(component, make_file):
    make_file("views/widgets/show/notes.txt", "ignored")
    make_file("views/widgets/show/show.html", "<p></p>")

    code = ComponentAssembler().assemble(client(component))

    assert "ignored" not in code
    assert code.count("add_template") == 1


def test_custom_handler_extends_view_discovery(component, make_file):
    make_file("views/widgets/show/show.md", "hello")
    registry = create_default_registry()
    registry.register("md", lambda text: f"<p>{text}</p>")

    code = ComponentAssembler(registry=registry).assemble(client(component))

    assert code == 'page.add_template("blog/widgets/show/show/body", "<p>hello</p>", {})\n'


def test_binding_table_reaches_output(component, make_file):
    make_file("views/items/show/item.html", "<div></div>")

    code = ComponentAssembler(parser=BindingParser()).assemble(server(component))

    assert code == '$page.add_template("blog/items/show/item/item", "<div></div>", {"click" => [onClick]})\n'


def test_empty_component_produces_empty_output(component):
    assert ComponentAssembler().assemble(server(component)) == ""


def test_settings_flow_into_output(component, make_file):
    make_file("config/routes.py", "routes()")
    make_file("config/initializers/setup.py", "")
    settings = Settings(
        source_ext="py",
        server_page_reference="app.page",
        task_base_class="Tasks::Base",
    )

    code = ComponentAssembler(
        tasks=TaskHandlerRegistry.from_names(["Job"]),
        settings=settings,
    ).assemble(server(component, name="shop"))

    assert code.startswith("app.page.add_routes do\n")
    assert "class Job < Tasks::Base; end" in code
    assert code.endswith("require 'shop/config/initializers/setup'")


def test_missing_component_root_produces_empty_output(tmp_path):
    assert ComponentAssembler().assemble(server(tmp_path / "nope")) == ""


def test_assembly_reads_only_through_file_system(memory_file_system):
    file_system = memory_file_system({"/virtual/blog/models/post.rb": "class Post; end"})
    descriptor = ComponentDescriptor(root_path="/virtual/blog", name="blog", variant=Variant.SERVER)

    assert ComponentAssembler(file_system=file_system).assemble(descriptor) == "class Post; end\n\n"


def test_listing_order_does_not_change_output(memory_file_system):
    files = {
        "/virtual/blog/config/routes.rb": "get '/'",
        "/virtual/blog/views/posts/show/show.html": "<p>show</p>",
        "/virtual/blog/views/posts/index/index.html": "<p>index</p>",
        "/virtual/blog/views/admin/list/list.html": "<p>list</p>",
        "/virtual/blog/controllers/posts_controller.rb": "class PostsController; end",
        "/virtual/blog/controllers/admin_controller.rb": "class AdminController; end",
        "/virtual/blog/models/user.rb": "class User; end",
        "/virtual/blog/models/account.rb": "class Account; end",
        "/virtual/blog/config/initializers/zeta.rb": "",
        "/virtual/blog/config/initializers/alpha.rb": "",
        "/virtual/blog/config/initializers/client/boot.rb": "",
    }
    descriptor = ComponentDescriptor(root_path="/virtual/blog", name="blog", variant=Variant.SERVER)

    ordered = ComponentAssembler(file_system=memory_file_system(files)).assemble(descriptor)
    scrambled = ComponentAssembler(file_system=memory_file_system(files, scrambled=True)).assemble(descriptor)

    assert scrambled == ordered
    assert scrambled.count("class User; end") == 1
    assert scrambled.index("blog/admin/list/list/body") < scrambled.index("blog/posts/index/index/body")
    assert scrambled.index("class AdminController") < scrambled.index("class PostsController")
    assert scrambled.endswith(
        "require 'blog/config/initializers/alpha'\n"
        "require 'blog/config/initializers/zeta'\n"
        "require 'blog/config/initializers/client/boot'"
    )


def test_module_level_assemble_and_default_name(full_component):
    descriptor = ComponentDescriptor.for_path(str(full_component), variant=Variant.CLIENT)

    assert descriptor.name == "blog"
    assert assemble(descriptor) == ComponentAssembler().assemble(descriptor)
