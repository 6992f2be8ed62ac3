"""CLI entrypoint: Typer app definition and command registration"""

import typer

from newsdoc.cli.commands import (
    add_article_cmd, convert_cmd, create_cmd, delete_cmd, dump_cmd, export_cmd,
    init_cmd, list_cmd, load_cmd, main_callback, remove_article_cmd, reorder_cmd, show_cmd,
)


app = typer.Typer(name="newsdoc", no_args_is_help=True, help="Article collection curation and Word export")

app.callback()(main_callback)
app.command(name="init")(init_cmd)
app.command(name="create")(create_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="add-article")(add_article_cmd)
app.command(name="remove-article")(remove_article_cmd)
app.command(name="reorder")(reorder_cmd)
app.command(name="delete")(delete_cmd)
app.command(name="export")(export_cmd)
app.command(name="dump")(dump_cmd)
app.command(name="load")(load_cmd)
app.command(name="convert")(convert_cmd)
