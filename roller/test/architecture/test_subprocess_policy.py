from __future__ import annotations

import ast

from roller.test.architecture._gate import require_arch_checks_enabled
from roller.test.architecture._utils import iter_python_files, package_root, read_tree


def _direct_subprocess_calls(tree: ast.AST) -> list[int]:
    lines: list[int] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        if not isinstance(func, ast.Attribute):
            continue
        if func.attr not in {"run", "check_output", "Popen", "create_subprocess_exec"}:
            continue
        if not isinstance(func.value, ast.Name):
            continue
        if func.value.id not in {"subprocess", "asyncio"}:
            continue
        lines.append(node.lineno)
    return lines


def test_processes_are_only_spawned_by_platform_process() -> None:
    require_arch_checks_enabled()

    root = package_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() == "platform/process.py":
            continue
        for line in _direct_subprocess_calls(read_tree(file_path)):
            offenders.append(f"{rel}:{line}: direct subprocess call outside platform/process.py")

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)
