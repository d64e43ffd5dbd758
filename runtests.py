# -*- coding: utf-8 -*-
"""Run all tests for `quosure`."""

import os
import re
import subprocess
import sys
import traceback
from importlib import import_module

from quosure.colorizer import ColorScheme, colorize

# --------------------------------------------------------------------------------

def filename_to_modulename(path, filename):
    """Convert .py filename to module name.

    Example::
        "some/dir", "mod.py" --> "some.dir.mod"
    """
    modpath = re.sub(re.escape(os.path.sep), r".", path)
    themod = re.sub(r"\.py$", r"", filename)
    return ".".join([modpath, themod])

def filenames_to_modulenames(path, filenames):
    """Convert .py filenames to module names.

    Example::
        "some/dir", ["mod1.py", "mod2.py", ...] --> ["some.dir.mod1", "some.dir.mod2", ...]
    """
    return list(sorted(filename_to_modulename(path, fn) for fn in filenames))

# --------------------------------------------------------------------------------
# In the `quosure` codebase, test modules are placed in "test/" subfolders,
# and follow the naming pattern "test_*.py". Each test module has a `runtests`
# function that runs all tests in that module.

def discovertestdirectories(root):
    pattern = f"{os.path.sep}test"
    out = []
    for path, dirs, files in os.walk(root):
        if path.endswith(pattern):
            out.append(path)
    return list(sorted(out))

def discovertestfiles_in(path):
    return [fn for fn in os.listdir(path) if fn.startswith("test_") and fn.endswith(".py")]

# --------------------------------------------------------------------------------
# Demos live in the "demo/" subfolder of the project top level, one script per file.

def discoverdemofiles(root):
    if not os.path.isdir(root):
        return []
    return list(sorted(os.path.join(root, fn) for fn in os.listdir(root) if fn.endswith(".py")))

# --------------------------------------------------------------------------------

def runtests():
    print(colorize("Testing started.", ColorScheme.TESTHEADING), file=sys.stderr)
    errors = 0
    for path in discovertestdirectories("quosure"):
        modnames = filenames_to_modulenames(os.path.relpath(path), discovertestfiles_in(path))
        for m in modnames:
            try:
                print(colorize(f"  Running module '{m}'...", ColorScheme.TESTHEADING),
                      file=sys.stderr)
                mod = import_module(m)
                mod.runtests()
                print(colorize(f"    PASS '{m}'", ColorScheme.TESTPASS), file=sys.stderr)
            except ImportError:
                print(colorize(f"    ERROR '{m}': import failed", ColorScheme.TESTERROR),
                      file=sys.stderr)
                traceback.print_exc()
                errors += 1
            except AssertionError:
                print(colorize(f"    FAIL '{m}': at least one test failed",
                               ColorScheme.TESTFAIL),
                      file=sys.stderr)
                traceback.print_exc()
                errors += 1
            except Exception:
                print(colorize(f"    ERROR '{m}': unexpected exception", ColorScheme.TESTERROR),
                      file=sys.stderr)
                traceback.print_exc()
                errors += 1
    print(colorize("Testing finished.", ColorScheme.TESTHEADING), file=sys.stderr)
    all_passed = (errors == 0)
    return all_passed


# This just checks that all the demos run without crashing on the version being tested,
# so that they are likely to be up to date. Run them like a shell script would.
def rundemos():
    print(colorize("Demos started.", ColorScheme.TESTHEADING), file=sys.stderr)
    errors = 0
    for fn in discoverdemofiles("demo"):
        print(colorize(f"  Running file '{fn}'...", ColorScheme.TESTHEADING),
              file=sys.stderr)
        cmd = [sys.executable, fn]
        env = dict(os.environ, PYTHONPATH=os.pathsep.join([os.getcwd(), os.environ.get("PYTHONPATH", "")]))
        try:
            subprocess.run(cmd, check=True, env=env,
                           stdin=subprocess.PIPE, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
            print(colorize(f"    PASS '{fn}'", ColorScheme.TESTPASS), file=sys.stderr)
        except subprocess.CalledProcessError as err:
            print(colorize(f"    FAIL '{fn}': subprocess returned non-zero exit status",
                           ColorScheme.TESTFAIL),
                  file=sys.stderr)
            traceback.print_exc()
            print(err.stderr.decode("utf-8"), file=sys.stderr)
            errors += 1
    print(colorize("Demos finished.", ColorScheme.TESTHEADING), file=sys.stderr)
    all_passed = (errors == 0)
    return all_passed

if __name__ == '__main__':
    t1 = runtests()
    t2 = rundemos()
    if not (t1 and t2):
        sys.exit(1)  # pragma: no cover, this only runs when the tests fail.
