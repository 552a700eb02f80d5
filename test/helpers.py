import difflib
import os
import subprocess
import sys
from typing import List, Optional

import py
import pygit2

DUMMY_NAME = "Testy McTestface"
DUMMY_EMAIL = "test@example.com"
DUMMY_DATE = "Wed 29 Oct 12:34:56 2020 PDT"


class Git:
    def __init__(self, path: py.path.local, git_executable: str) -> None:
        self.path = path
        self.git_executable = git_executable

    def init_repo(self, make_initial_commit: bool = True) -> None:
        self.run("init")
        self.run("config", ["user.name", DUMMY_NAME])
        self.run("config", ["user.email", DUMMY_EMAIL])

        # Silence some log-spam.
        self.run("config", ["advice.detachedHead", "false"])

        if make_initial_commit:
            self.commit_file(name="initial", time=0)

    def get_repo(self) -> pygit2.Repository:
        return pygit2.Repository(str(self.path))

    def run(
        self,
        command: str,
        args: Optional[List[str]] = None,
        time: int = 0,
        check: bool = True,
    ) -> str:
        if args is None:
            args = []
        args = [self.git_executable, command, *args]

        # Required for determinism, as these values will be baked into the commit
        # hash.
        date = f"{DUMMY_DATE} -{time:02d}00"
        env = {
            "GIT_AUTHOR_DATE": date,
            "GIT_COMMITTER_DATE": date,
            # Keep the user's own Git configuration out of the test repos.
            "HOME": str(self.path),
            "GIT_CONFIG_NOSYSTEM": "1",
            "PATH": os.environ.get("PATH", os.defpath),
        }

        result = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            env=env,
            check=check,
        )
        return result.stdout.decode()

    def commit_file(self, name: str, time: int, contents: Optional[str] = None) -> str:
        path = os.path.join(os.getcwd(), f"{name}.txt")
        with open(path, "w") as f:
            if contents is None:
                f.write(f"{name} contents\n")
            else:
                f.write(contents)
                f.write("\n")
        self.run("add", ["."])
        self.run("commit", ["-m", f"create {name}.txt"], time=time)
        return self.rev_parse("HEAD")

    def rev_parse(self, rev: str) -> str:
        return self.run("rev-parse", [rev]).strip()

    def detach_head(self, rev: str = "HEAD") -> None:
        self.run("checkout", ["--detach", rev])

    def create_remote_branch(self, name: str, rev: str = "HEAD") -> str:
        """Create a remote-tracking branch such as `origin/main`, without a fetch.

        Returns:
          The full name of the reference.
        """
        ref_name = f"refs/remotes/{name}"
        self.run("update-ref", [ref_name, self.rev_parse(rev)])
        return ref_name

    def create_tag(self, name: str, rev: str = "HEAD", annotated: bool = False) -> str:
        if annotated:
            self.run("tag", ["-a", name, "-m", f"tag {name}", rev])
        else:
            self.run("tag", [name, rev])
        return f"refs/tags/{name}"


def _rstrip_lines(lines: str) -> List[str]:
    return [line.rstrip() + "\n" for line in lines.splitlines()]


def compare(actual: str, expected: str) -> None:
    actual_lines = _rstrip_lines(actual)
    expected_lines = _rstrip_lines(expected)

    sys.stdout.writelines(
        difflib.context_diff(
            expected_lines, actual_lines, fromfile="Expected", tofile="Actual", n=999
        )
    )
    assert actual == expected
