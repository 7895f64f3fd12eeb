from sshpub.settings import Settings

def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("SSHPUB_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SSHPUB_DEFAULT_RSA_BITS", raising=False)
    monkeypatch.delenv("SSHPUB_MIN_RSA_BITS", raising=False)

    s = Settings.from_env()
    assert s.LOG_LEVEL == "INFO"
    assert s.DEFAULT_RSA_BITS == 2048
    assert s.MIN_RSA_BITS == 2048

def test_settings_parsing(monkeypatch):
    monkeypatch.setenv("SSHPUB_LOG_LEVEL", "debug")
    monkeypatch.setenv("SSHPUB_DEFAULT_RSA_BITS", "3072")
    monkeypatch.setenv("SSHPUB_MIN_RSA_BITS", "4096")

    s = Settings.from_env()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.DEFAULT_RSA_BITS == 3072
    assert s.MIN_RSA_BITS == 4096

def test_settings_bad_ints_fall_back(monkeypatch):
    monkeypatch.setenv("SSHPUB_DEFAULT_RSA_BITS", "lots")
    monkeypatch.setenv("SSHPUB_MIN_RSA_BITS", "-1")

    s = Settings.from_env()
    assert s.DEFAULT_RSA_BITS == 2048
    assert s.MIN_RSA_BITS == 2048
