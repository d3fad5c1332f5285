from __future__ import annotations

from pathlib import Path

import pytest

from gemtext.domain.errors import DirectoryResolutionError
from gemtext.domain.models import FileReference, ViewMode, ViewProjection
from gemtext.services.file_service import FileService
from gemtext.services.session_controller import EditorSessionController, IEditorView

# ------------------------------
# Fakes & helpers
# ------------------------------


class RecordingView:
    def __init__(self) -> None:
        self.projections: list[ViewProjection] = []

    def render(self, projection: ViewProjection) -> None:
        self.projections.append(projection)

    @property
    def last(self) -> ViewProjection:
        return self.projections[-1]


class FakeLifecycle:
    def __init__(self) -> None:
        self.callbacks: list = []

    def register(self, on_background) -> None:
        self.callbacks.append(on_background)

    def unregister(self, on_background) -> None:
        self.callbacks.remove(on_background)

    def fire(self) -> None:
        for cb in list(self.callbacks):
            cb()


class CountingFiles(FileService):
    """Real file I/O plus a call log."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.fail_writes = False
        self.fail_reads = False

    def read_text(self, path: Path) -> str:
        self.calls.append("read")
        if self.fail_reads:
            raise OSError("read failed")
        return super().read_text(path)

    def write_text_atomic(self, path: Path, text: str) -> None:
        self.calls.append("write")
        if self.fail_writes:
            raise OSError("disk full")
        super().write_text_atomic(path, text)


class DenyingBroker:
    def __init__(self) -> None:
        self.started = 0
        self.stopped = 0

    def start_accessing(self, ref: FileReference) -> bool:
        self.started += 1
        return False

    def stop_accessing(self, ref: FileReference) -> None:
        self.stopped += 1


class NoDirectories:
    def resolve(self) -> Path:
        raise DirectoryResolutionError("no cloud container, no documents dir")


def _editing(controller: EditorSessionController, md_file: Path) -> EditorSessionController:
    controller.select_file(FileReference.from_path(md_file))
    assert controller.toggle_editing() is True
    return controller


@pytest.fixture()
def counting_files() -> CountingFiles:
    return CountingFiles()


@pytest.fixture()
def counting_controller(renderer, counting_files, access, directories, fixed_clock):
    return EditorSessionController(
        renderer=renderer,
        files=counting_files,
        access=access,
        directories=directories,
        clock=fixed_clock,
    )


# ------------------------------
# Initial state
# ------------------------------


def test_initial_state(controller: EditorSessionController):
    assert controller.text == ""
    assert controller.file_ref is None
    assert controller.mode is ViewMode.VIEWING
    assert controller.state.help_visible is False
    assert controller.state.creation_error is False


def test_attach_view_renders_immediately(controller: EditorSessionController):
    view = RecordingView()
    assert isinstance(view, IEditorView)
    controller.attach_view(view)
    assert len(view.projections) == 1
    assert view.last.can_edit is False


# ------------------------------
# select / load / save
# ------------------------------


def test_select_file_loads_contents(controller, md_file):
    view = RecordingView()
    controller.attach_view(view)
    controller.select_file(FileReference.from_path(md_file))

    assert controller.file_ref.path == md_file
    assert controller.text == md_file.read_text(encoding="utf-8")
    assert view.last.title == "notes.md"
    assert view.last.kind == "markdown"
    assert view.last.can_edit is True


def test_save_then_load_roundtrip(controller, md_file):
    ref = FileReference.from_path(md_file)
    _editing(controller, md_file)
    text = "# Changed\n\n- ünïcødé ✓\n"
    controller.update_text(text)

    assert controller.save() is True
    controller.update_text("scratch")
    assert controller.load(ref) is True
    assert controller.text == text
    assert md_file.read_text(encoding="utf-8") == text


def test_crlf_file_is_saved_with_crlf(controller, tmp_path):
    p = tmp_path / "dos.txt"
    p.write_bytes(b"a\r\nb\r\n")
    _editing(controller, p)

    # Editing widgets hand back LF-only text
    controller.update_text("a\nb\nc\n")
    assert controller.text == "a\r\nb\r\nc\r\n"
    assert controller.save() is True
    assert p.read_bytes() == b"a\r\nb\r\nc\r\n"


def test_lf_file_stays_lf(controller, md_file):
    _editing(controller, md_file)
    controller.update_text("x\ny\n")
    controller.save()
    assert md_file.read_bytes() == b"x\ny\n"


def test_selecting_new_file_discards_unsaved_edits(controller, md_file, tmp_path):
    other = tmp_path / "other.md"
    other.write_text("other body", encoding="utf-8")
    _editing(controller, md_file)
    controller.update_text("unsaved edit")

    controller.select_file(FileReference.from_path(other))

    assert controller.text == "other body"
    # never written back to the first file either
    assert "unsaved edit" not in md_file.read_text(encoding="utf-8")


def test_load_failure_keeps_buffer(controller, tmp_path):
    controller.select_file(FileReference.from_path(tmp_path / "a.md"))  # missing file
    assert controller.text == ""
    assert controller.file_ref is not None


def test_load_invalid_utf8_keeps_buffer(controller, md_file, tmp_path):
    controller.select_file(FileReference.from_path(md_file))
    before = controller.text
    bad = tmp_path / "latin1.txt"
    bad.write_bytes(b"caf\xe9")

    assert controller.load(FileReference.from_path(bad)) is False
    assert controller.text == before


def test_load_none_is_noop(controller):
    assert controller.load(None) is False


def test_save_without_file_is_noop(counting_controller, counting_files):
    assert counting_controller.save() is False
    assert counting_files.calls == []


def test_save_failure_is_swallowed(counting_controller, counting_files, md_file, access):
    _editing(counting_controller, md_file)
    counting_controller.update_text("new text")
    counting_files.fail_writes = True

    assert counting_controller.save() is False
    assert counting_controller.text == "new text"
    assert access.outstanding == 0


def test_denied_grant_skips_io_and_releases_nothing(renderer, counting_files, directories, md_file):
    broker = DenyingBroker()
    c = EditorSessionController(renderer, counting_files, broker, directories)
    c.select_file(FileReference.from_path(md_file))

    assert c.text == ""
    assert counting_files.calls == []
    assert broker.started == 1
    assert broker.stopped == 0


def test_grants_are_released_after_every_operation(controller, access, md_file, tmp_path):
    _editing(controller, md_file)
    controller.save()
    controller.load(FileReference.from_path(tmp_path / "missing.md"))
    controller.toggle_editing()
    assert access.outstanding == 0


def test_grant_released_when_read_fails(counting_controller, counting_files, access, md_file):
    counting_files.fail_reads = True
    counting_controller.select_file(FileReference.from_path(md_file))
    assert access.outstanding == 0


# ------------------------------
# mode switching
# ------------------------------


def test_cannot_enter_editing_without_file(controller):
    view = RecordingView()
    controller.attach_view(view)
    assert controller.toggle_editing() is False
    assert controller.mode is ViewMode.VIEWING
    assert len(view.projections) == 1


def test_viewing_to_editing_has_no_io(counting_controller, counting_files, md_file):
    counting_controller.select_file(FileReference.from_path(md_file))
    counting_files.calls.clear()

    assert counting_controller.toggle_editing() is True
    assert counting_controller.mode is ViewMode.EDITING
    assert counting_files.calls == []


def test_editing_to_viewing_saves_once_then_loads_once(counting_controller, counting_files, md_file):
    _editing(counting_controller, md_file)
    counting_controller.update_text("# Saved on exit")
    counting_files.calls.clear()

    counting_controller.toggle_editing()

    assert counting_files.calls == ["write", "read"]
    assert counting_controller.mode is ViewMode.VIEWING
    assert md_file.read_text(encoding="utf-8") == "# Saved on exit"


def test_editing_to_viewing_calls_save_then_load_even_without_file(controller, monkeypatch):
    # Force the otherwise unreachable state: editing with no file selected
    controller._set(mode=ViewMode.EDITING)
    calls: list[str] = []
    real_save, real_load = controller.save, controller.load

    def spy_save():
        calls.append("save")
        return real_save()

    def spy_load(ref):
        calls.append("load")
        return real_load(ref)

    monkeypatch.setattr(controller, "save", spy_save)
    monkeypatch.setattr(controller, "load", spy_load)

    controller.toggle_editing()
    assert calls == ["save", "load"]
    assert controller.mode is ViewMode.VIEWING


def test_failed_save_on_exit_resyncs_with_disk(counting_controller, counting_files, md_file):
    on_disk = md_file.read_text(encoding="utf-8")
    _editing(counting_controller, md_file)
    counting_controller.update_text("lost edit")
    counting_files.fail_writes = True

    counting_controller.toggle_editing()

    assert counting_controller.text == on_disk


def test_external_change_picked_up_on_exit(controller, md_file, monkeypatch):
    _editing(controller, md_file)
    controller.update_text("mine")

    real_write = controller.files.write_text_atomic

    def write_then_clobber(path, text):
        real_write(path, text)
        path.write_text("theirs", encoding="utf-8")

    monkeypatch.setattr(controller.files, "write_text_atomic", write_then_clobber)
    controller.toggle_editing()
    assert controller.text == "theirs"


def test_update_text_ignored_while_viewing(controller, md_file):
    controller.select_file(FileReference.from_path(md_file))
    before = controller.text
    controller.update_text("typed while viewing")
    assert controller.text == before


def test_editing_projection_is_raw(controller, md_file):
    view = RecordingView()
    controller.attach_view(view)
    _editing(controller, md_file)
    assert view.last.kind == "raw"
    assert view.last.content == controller.text


# ------------------------------
# help panel
# ------------------------------


def test_toggle_help_only_while_editing(controller, md_file):
    controller.select_file(FileReference.from_path(md_file))
    controller.toggle_help()
    assert controller.state.help_visible is False

    controller.toggle_editing()
    controller.toggle_help()
    assert controller.state.help_visible is True
    assert controller.projection().help_visible is True
    controller.toggle_help()
    assert controller.state.help_visible is False


def test_leaving_editing_resets_help(controller, md_file):
    _editing(controller, md_file)
    controller.toggle_help()
    controller.toggle_editing()

    assert controller.state.help_visible is False
    controller.toggle_editing()
    assert controller.projection().help_visible is False


def test_help_flag_has_no_effect_while_viewing(controller, md_file):
    controller.select_file(FileReference.from_path(md_file))
    baseline = controller.projection()
    controller._set(help_visible=True)
    assert controller.projection() == baseline


# ------------------------------
# lifecycle
# ------------------------------


def test_backgrounding_while_editing_saves_once(counting_controller, counting_files, md_file):
    lifecycle = FakeLifecycle()
    counting_controller.attach_lifecycle(lifecycle)
    _editing(counting_controller, md_file)
    counting_controller.update_text("autosaved")
    counting_files.calls.clear()

    lifecycle.fire()

    assert counting_files.calls == ["write"]
    assert md_file.read_text(encoding="utf-8") == "autosaved"
    assert counting_controller.mode is ViewMode.EDITING


def test_backgrounding_while_viewing_does_not_save(counting_controller, counting_files, md_file):
    lifecycle = FakeLifecycle()
    counting_controller.attach_lifecycle(lifecycle)
    counting_controller.select_file(FileReference.from_path(md_file))
    counting_files.calls.clear()

    lifecycle.fire()

    assert counting_files.calls == []


def test_attach_lifecycle_twice_replaces_registration(controller):
    first, second = FakeLifecycle(), FakeLifecycle()
    controller.attach_lifecycle(first)
    controller.attach_lifecycle(second)
    assert first.callbacks == []
    assert len(second.callbacks) == 1


def test_close_saves_and_unregisters(counting_controller, counting_files, md_file):
    lifecycle = FakeLifecycle()
    view = RecordingView()
    counting_controller.attach_lifecycle(lifecycle)
    counting_controller.attach_view(view)
    _editing(counting_controller, md_file)
    counting_controller.update_text("closing")
    counting_files.calls.clear()
    rendered = len(view.projections)

    counting_controller.close()

    assert counting_files.calls == ["write"]
    assert lifecycle.callbacks == []
    counting_controller.toggle_help()
    assert len(view.projections) == rendered


# ------------------------------
# new files
# ------------------------------


def test_create_new_file_in_documents(controller, docs_root):
    view = RecordingView()
    controller.attach_view(view)

    assert controller.create_new_file() is True

    expected = docs_root / "GemText" / "Note 2024-05-01 13.45.12.md"
    assert expected.exists()
    assert controller.file_ref.path == expected
    assert controller.text == ""
    assert controller.mode is ViewMode.EDITING
    assert view.last.mode is ViewMode.EDITING


def test_create_new_file_keeps_existing_file(controller, docs_root):
    target = docs_root / "GemText" / "Note 2024-05-01 13.45.12.md"
    target.parent.mkdir(parents=True)
    target.write_text("already here", encoding="utf-8")

    assert controller.create_new_file() is True
    assert controller.text == "already here"


def test_create_new_file_uses_configured_extension(renderer, file_service, access, directories, fixed_clock, docs_root):
    c = EditorSessionController(
        renderer, file_service, access, directories, file_extension="txt", clock=fixed_clock
    )
    c.create_new_file()
    assert c.file_ref.path.suffix == ".txt"


def test_create_new_file_without_any_directory_sets_error(renderer, file_service, access, md_file):
    c = EditorSessionController(renderer, file_service, access, NoDirectories())
    c.select_file(FileReference.from_path(md_file))
    before = c.state

    assert c.create_new_file() is False

    assert c.state.creation_error is True
    assert c.file_ref == before.file_ref
    assert c.text == before.text
    assert c.mode is before.mode


def test_create_new_file_creation_failure_sets_error(renderer, access, directories, monkeypatch):
    files = FileService()

    def refuse(path):
        raise PermissionError("read-only")

    monkeypatch.setattr(files, "create_empty", refuse)
    c = EditorSessionController(renderer, files, access, directories)

    assert c.create_new_file() is False
    assert c.state.creation_error is True
    assert c.file_ref is None
    assert c.mode is ViewMode.VIEWING


def test_dismiss_creation_error(renderer, file_service, access):
    c = EditorSessionController(renderer, file_service, access, NoDirectories())
    view = RecordingView()
    c.attach_view(view)
    c.create_new_file()
    assert view.last.creation_error is True

    c.dismiss_creation_error()
    assert c.state.creation_error is False
    assert view.last.creation_error is False
