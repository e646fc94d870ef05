"""A small command shell: parses pipelines, lists, background jobs and redirections."""

from __future__ import annotations

import contextlib
import io
import os
import sys
from dataclasses import dataclass, field
from typing import IO, Callable, Iterable, Mapping, Union

from rvuser import cat, echo, fileops, grep, ls, wc
from rvuser.layout import OpenFlag
from rvuser.ulib import gets

MAXARGS = 10
_LINEBUF = 100

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"

CommandFunc = Callable[[list], Union[int, None]]


class ShellSyntaxError(ValueError):
    """Raised when a command line cannot be parsed."""

    def __init__(self, message: str, leftovers: str | None = None) -> None:
        super().__init__(message)
        self.leftovers = leftovers


@dataclass
class ExecCmd:
    """Run a program with arguments; ``argv[0]`` names the program."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with descriptor ``fd`` opened on ``file``."""

    cmd: "Command"
    file: str
    mode: OpenFlag
    fd: int

    def __post_init__(self) -> None:
        if self.fd not in (0, 1):
            raise ValueError(f"cannot redirect descriptor {self.fd}")


@dataclass
class PipeCmd:
    """Feed the output of ``left`` into ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run ``left`` to completion, then ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run ``cmd`` without waiting for it."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class _Parser:
    def __init__(self, text: str) -> None:
        self.s = text
        self.pos = 0
        self.end = len(text)

    def _skip(self) -> None:
        while self.pos < self.end and self.s[self.pos] in WHITESPACE:
            self.pos += 1

    def gettoken(self) -> tuple[str, str]:
        """Return the next token kind and, for words, the word itself."""
        self._skip()
        start = self.pos
        if self.pos >= self.end:
            return "", ""
        c = self.s[self.pos]
        if c in "|();&<":
            tok = c
            self.pos += 1
        elif c == ">":
            tok = ">"
            self.pos += 1
            if self.pos < self.end and self.s[self.pos] == ">":
                tok = "+"
                self.pos += 1
        else:
            tok = "a"
            while (self.pos < self.end and self.s[self.pos] not in WHITESPACE
                   and self.s[self.pos] not in SYMBOLS):
                self.pos += 1
        word = self.s[start:self.pos]
        self._skip()
        return tok, word

    def peek(self, toks: str) -> bool:
        self._skip()
        return self.pos < self.end and self.s[self.pos] in toks

    def parseline(self) -> Command:
        cmd = self.parsepipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.parseline())
        return cmd

    def parsepipe(self) -> Command:
        cmd = self.parseexec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.parsepipe())
        return cmd

    def parseredirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            tok, _ = self.gettoken()
            kind, name = self.gettoken()
            if kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if tok == "<":
                cmd = RedirCmd(cmd, name, OpenFlag.RDONLY, 0)
            elif tok == ">":
                cmd = RedirCmd(cmd, name, OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC, 1)
            else:  # >>
                cmd = RedirCmd(cmd, name, OpenFlag.WRONLY | OpenFlag.CREATE, 1)
        return cmd

    def parseblock(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.parseline()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.parseredirs(cmd)

    def parseexec(self) -> Command:
        if self.peek("("):
            return self.parseblock()
        exec_cmd = ExecCmd()
        ret = self.parseredirs(exec_cmd)
        while not self.peek("|)&;"):
            tok, word = self.gettoken()
            if not tok:
                break
            if tok != "a":
                raise ShellSyntaxError("syntax")
            exec_cmd.argv.append(word)
            if len(exec_cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.parseredirs(ret)
        return ret


def parsecmd(s: str) -> Command:
    """Parse one command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.parseline()
    parser.peek("")
    if parser.pos != parser.end:
        raise ShellSyntaxError("syntax", leftovers=s[parser.pos:])
    return cmd


def _default_commands() -> dict[str, CommandFunc]:
    return {
        "cat": cat.main,
        "echo": echo.main,
        "grep": grep.main,
        "wc": wc.main,
        "ls": ls.main,
        "kill": fileops.kill_main,
        "ln": fileops.ln_main,
        "mkdir": fileops.mkdir_main,
        "rm": fileops.rm_main,
    }


def _os_flags(mode: OpenFlag) -> int:
    flags = os.O_RDONLY
    if mode & OpenFlag.WRONLY:
        flags = os.O_WRONLY
    if mode & OpenFlag.RDWR:
        flags = os.O_RDWR
    if mode & OpenFlag.CREATE:
        flags |= os.O_CREAT
    if mode & OpenFlag.TRUNC:
        flags |= os.O_TRUNC
    return flags | getattr(os, "O_BINARY", 0)


def _exit_status(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


class Shell:
    """Runs parsed commands against a table of named programs.

    ``stdin`` and ``stdout`` are binary streams; ``stderr`` is a text stream.
    Background jobs run to completion before the shell carries on.
    """

    def __init__(
        self,
        stdin: IO[bytes] | None = None,
        stdout: IO[bytes] | None = None,
        stderr: IO[str] | None = None,
        commands: Mapping[str, CommandFunc] | None = None,
    ) -> None:
        self.stdin = sys.stdin.buffer if stdin is None else stdin
        self.stdout = sys.stdout.buffer if stdout is None else stdout
        self.stderr = sys.stderr if stderr is None else stderr
        self.commands = dict(_default_commands() if commands is None else commands)

    def run(self, cmd: Command) -> int:
        """Run a command tree and return its exit status."""
        return self._run(cmd, self.stdin, self.stdout)

    def execute(self, line: str) -> int:
        """Handle one input line as the interactive loop does."""
        if line.startswith("cd "):
            path = line[:-1][3:]  # chop the newline
            try:
                os.chdir(path)
            except OSError:
                self.stderr.write(f"cannot cd {path}\n")
                return 1
            return 0
        try:
            cmd = parsecmd(line)
        except ShellSyntaxError as exc:
            if exc.leftovers is not None:
                self.stderr.write(f"leftovers: {exc.leftovers}\n")
            self.stderr.write(f"{exc}\n")
            return 1
        return self.run(cmd)

    def _run(self, cmd: Command, stdin: IO[bytes], stdout: IO[bytes]) -> int:
        match cmd:
            case ExecCmd(argv=[]):
                return 1
            case ExecCmd(argv=[name, *args]):
                func = self.commands.get(name.rsplit("/", 1)[-1])
                if func is None:
                    self.stderr.write(f"exec {name} failed\n")
                    return 0
                return self._invoke(func, args, stdin, stdout)
            case RedirCmd():
                try:
                    fd = os.open(cmd.file, _os_flags(cmd.mode), 0o666)
                except OSError:
                    self.stderr.write(f"open {cmd.file} failed\n")
                    return 1
                with os.fdopen(fd, "rb" if cmd.fd == 0 else "wb") as f:
                    if cmd.fd == 0:
                        return self._run(cmd.cmd, f, stdout)
                    return self._run(cmd.cmd, stdin, f)
            case PipeCmd():
                pipe = io.BytesIO()
                self._run(cmd.left, stdin, pipe)
                self._run(cmd.right, io.BytesIO(pipe.getvalue()), stdout)
                return 0
            case ListCmd():
                self._run(cmd.left, stdin, stdout)
                return self._run(cmd.right, stdin, stdout)
            case BackCmd():
                self._run(cmd.cmd, stdin, stdout)
                return 0
        raise TypeError(f"not a command: {cmd!r}")

    def _invoke(self, func: CommandFunc, args: list[str],
                stdin: IO[bytes], stdout: IO[bytes]) -> int:
        text_in = io.TextIOWrapper(stdin, encoding="utf-8", errors="surrogateescape", newline="")
        text_out = io.TextIOWrapper(stdout, encoding="utf-8", errors="surrogateescape",
                                    newline="", write_through=True)
        saved_stdin = sys.stdin
        sys.stdin = text_in
        try:
            with contextlib.redirect_stdout(text_out), contextlib.redirect_stderr(self.stderr):
                try:
                    status = _exit_status(func(list(args)))
                except SystemExit as exc:
                    status = _exit_status(exc.code)
        finally:
            sys.stdin = saved_stdin
            text_out.flush()
            text_out.detach()
            text_in.detach()
        return status


def main(argv: Iterable[str] | None = None) -> int:
    shell = Shell()
    while True:
        shell.stderr.write("$ ")
        shell.stderr.flush()
        raw = gets(shell.stdin, _LINEBUF)
        line = raw.split(b"\0", 1)[0].decode("utf-8", errors="surrogateescape")
        if not line:
            break
        shell.execute(line)
        shell.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())