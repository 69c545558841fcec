"""Tests for the configurator and the git-backed config store."""
import pytest

from gitboot.core import GitbootError
from gitboot.gitconfig import GitConfigStore, configure_git, credential_helper_for
from gitboot.platform_utils import OSKind

from conftest import FakeConfigStore, ScriptedPrompter


def test_identity_only(store, settings):
    prompter = ScriptedPrompter(["Ada Lovelace", "ada@example.com", False, False, False])

    identity = configure_git(store, prompter, OSKind.LINUX, settings)

    assert identity.name == "Ada Lovelace"
    assert identity.email == "ada@example.com"
    assert store.values["user.name"] == "Ada Lovelace"
    assert store.values["user.email"] == "ada@example.com"
    assert "init.defaultBranch" not in store.values
    assert "core.editor" not in store.values
    assert not any(key.startswith("url.") for key in store.values)


def test_empty_name_and_email_are_reprompted(store, settings):
    prompter = ScriptedPrompter(
        ["", "   ", "Ada Lovelace", "", "ada@example.com", False, False, False]
    )

    configure_git(store, prompter, OSKind.LINUX, settings)

    assert store.values["user.name"] == "Ada Lovelace"
    assert store.values["user.email"] == "ada@example.com"
    assert prompter.questions[:5] == ["Enter your name"] * 3 + ["Enter your email"] * 2


def test_email_is_not_format_checked(store, settings):
    prompter = ScriptedPrompter(["Ada", "not-an-email", False, False, False])
    configure_git(store, prompter, OSKind.LINUX, settings)
    assert store.values["user.email"] == "not-an-email"


def test_all_preferences(store, settings):
    prompter = ScriptedPrompter(
        ["Ada", "ada@example.com", True, True, "code --wait", True]
    )

    configure_git(store, prompter, OSKind.LINUX, settings)

    assert store.values["init.defaultBranch"] == "main"
    assert store.values["core.editor"] == "code --wait"
    assert store.values["url.git@github.com:.insteadOf"] == "https://github.com/"


def test_editor_stored_verbatim(store, settings):
    editor = '"/Applications/Sublime Text.app/Contents/SharedSupport/bin/subl" -w '
    prompter = ScriptedPrompter(["Ada", "ada@example.com", False, True, editor, False])
    configure_git(store, prompter, OSKind.LINUX, settings)
    assert store.values["core.editor"] == editor


def test_empty_editor_is_skipped(store, settings):
    prompter = ScriptedPrompter(["Ada", "ada@example.com", False, True, "", False])
    configure_git(store, prompter, OSKind.LINUX, settings)
    assert "core.editor" not in store.values


def test_default_branch_follows_settings(store, settings):
    settings["git"]["default_branch"] = "trunk"
    prompter = ScriptedPrompter(["Ada", "ada@example.com", True, False, False])

    configure_git(store, prompter, OSKind.LINUX, settings)

    assert store.values["init.defaultBranch"] == "trunk"


@pytest.mark.parametrize(
    "os_kind, helper",
    [
        (OSKind.LINUX, "cache --timeout=3600"),
        (OSKind.MACOS, "osxkeychain"),
        (OSKind.WINDOWS, "manager"),
    ],
)
def test_credential_helper_per_os(store, settings, os_kind, helper):
    prompter = ScriptedPrompter(["Ada", "ada@example.com", False, False, False])
    configure_git(store, prompter, os_kind, settings)
    assert store.values["credential.helper"] == helper


def test_credential_helper_for_unknown():
    assert credential_helper_for(OSKind.UNKNOWN) is None
    assert credential_helper_for(OSKind.LINUX, 900) == "cache --timeout=900"


def test_credential_helper_failure_is_a_warning(settings, capsys):
    store = FakeConfigStore(failing_keys={"credential.helper"})
    prompter = ScriptedPrompter(["Ada", "ada@example.com", False, False, False])

    configure_git(store, prompter, OSKind.LINUX, settings)

    assert store.values["user.name"] == "Ada"
    assert "Warning" in capsys.readouterr().out


def test_required_write_failure_is_fatal(settings):
    store = FakeConfigStore(failing_keys={"user.email"})
    prompter = ScriptedPrompter(["Ada", "ada@example.com"])

    with pytest.raises(GitbootError, match="user.email"):
        configure_git(store, prompter, OSKind.LINUX, settings)


def test_summary_shows_user_and_url_entries(settings, capsys):
    store = FakeConfigStore({"core.autocrlf": "input"})
    prompter = ScriptedPrompter(["Ada", "ada@example.com", False, False, True])

    configure_git(store, prompter, OSKind.LINUX, settings)

    out = capsys.readouterr().out
    assert "user.name = Ada" in out
    assert "url.git@github.com:.insteadOf = https://github.com/" in out
    assert "autocrlf" not in out


def test_git_config_store_commands(shell):
    shell.respond(["git", "config", "--global", "--get", "user.email"], stdout="ada@example.com\n")
    shell.respond(["git", "config", "--global", "--get", "user.name"], returncode=1)
    shell.respond(
        ["git", "config", "--global", "--list"],
        stdout="user.name=Ada\nurl.git@github.com:.insteadof=https://github.com/\n",
    )
    git_store = GitConfigStore()

    assert git_store.get("user.email") == "ada@example.com"
    assert git_store.get("user.name") is None
    assert git_store.entries() == [
        ("user.name", "Ada"),
        ("url.git@github.com:.insteadof", "https://github.com/"),
    ]

    git_store.set("init.defaultBranch", "main")
    assert ["git", "config", "--global", "init.defaultBranch", "main"] in shell.commands


def test_git_config_store_set_failure(shell):
    shell.respond(["git", "config", "--global", "user.name"], returncode=255)
    with pytest.raises(GitbootError):
        GitConfigStore().set("user.name", "Ada")
