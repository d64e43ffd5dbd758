# -*- coding: utf-8; -*-
"""Row-wise data verbs built on `quosure`.

Each verb captures its arguments once, in the caller's scope, expands them
once, and then evaluates them once per row, with the row as the data mask.
"""

from quosure import as_label, evaluate, expand, quo

def mutate(rows, *exprs, **named):
    """Add computed columns. Unnamed expressions are named by their source."""
    # `quo` looks at the caller's frame, so no comprehensions here (they have frames of their own).
    quotes = []
    for e in exprs:
        q = quo(e, depth=2)
        quotes.append((as_label(q), expand(q)))
    for name, e in named.items():
        quotes.append((name, expand(quo(e, depth=2))))
    out = []
    for row in rows:
        row = dict(row)
        for name, q in quotes:
            row[name] = evaluate(q, row)  # later columns see earlier ones
        out.append(row)
    return out

def keep(rows, condition):
    """Keep the rows for which `condition` is true."""
    q = expand(quo(condition, depth=2))
    return [row for row in rows if evaluate(q, row)]


def main():
    rows = [{"name": "ann", "price": 10.0, "qty": 3},
            {"name": "bob", "price": 2.5, "qty": 10},
            {"name": "cat", "price": 99.0, "qty": 1}]

    vat = 0.24
    # `vat` comes from this function's scope; `price` and `qty` from each row.
    rows = mutate(rows, total="price * qty * (1 + vat)")

    # Build part of an expression programmatically, and unquote it.
    threshold = 35  # noqa: F841, used via quo
    cheap = keep(rows, "total < UQ(threshold)")

    # Splice computed arguments into a call.
    extra = {"currency": "EUR"}  # noqa: F841, used via quo
    rows = mutate(rows, "dict(UQS(extra), name=name)")

    for row in cheap:
        print(row["name"], round(row["total"], 2))
    for row in rows:
        print(row["dict(UQS(extra), name=name)"])

    assert [row["name"] for row in cheap] == ["bob"]
    assert rows[0]["dict(UQS(extra), name=name)"] == {"name": "ann", "currency": "EUR"}
    assert abs(rows[0]["total"] - 37.2) < 1e-9

if __name__ == '__main__':
    main()
