from .term import Abstraction, Application, Identifier, Term, Variable

__all__ = ["render"]


def _identifier(identifier: Identifier, origins: bool) -> str:
    if origins and identifier.renamed:
        return f"{identifier.current_name}<{identifier.original_name}>"
    return identifier.current_name


def _wrap(text: str) -> str:
    # only compound renderings contain a space
    return f"({text})" if " " in text else text


def render(term: Term, origins: bool = True) -> str:
    """
    Render a term with the surface syntax.

    ```
    render(parse("(#x -> x) y"))         # "(#x -> x) y"
    render(uniquify(parse("#x -> x")))   # "#v0<x> -> v0<x>"
    ```

    Args:
        origins: suffix renamed identifiers with their name in the source, like `v0<x>`
    """
    if isinstance(term, Variable):
        return _identifier(term.identifier, origins)
    if isinstance(term, Abstraction):
        return f"#{_identifier(term.parameter, origins)} -> {render(term.body, origins)}"
    assert isinstance(term, Application)
    function = _wrap(render(term.function, origins))
    argument = _wrap(render(term.argument, origins))
    return f"{function} {argument}"
