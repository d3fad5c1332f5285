from gemtext.services.settings_service import SettingsService


def test_settings_geometry_default_is_none(settings_service: SettingsService):
    assert settings_service.get_geometry() is None


def test_settings_roundtrip_geometry(settings_service: SettingsService):
    blob = b"\x01\x02\x03"
    settings_service.set_geometry(blob)
    got = settings_service.get_geometry()
    assert isinstance(got, (bytes, bytearray))
    assert bytes(got) == blob
