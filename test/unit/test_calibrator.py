import pytest

from sqliprobe.core.calibrator import Calibrator, normalize_signatures, _rand
from sqliprobe.core.errors import CalibrationInconsistency, ConfigurationError, TransportError
from sqliprobe.core.models import ProbeResponse


class SequenceClient:
    """Returns the given (status, ms) pairs in order, whatever the payload."""

    def __init__(self, samples):
        self.samples = list(samples)
        self.sent = []

    def send(self, payload):
        self.sent.append(payload)
        status, ms = self.samples.pop(0)
        return ProbeResponse(payload, status, "ok", ms)


def test_calibrate_averages_elapsed():
    client = SequenceClient([(200, 100), (200, 120), (200, 140)])
    assert Calibrator(client).calibrate(3) == 120
    assert len(client.sent) == 3


def test_calibrate_uses_integer_division():
    client = SequenceClient([(200, 100), (200, 101)])
    assert Calibrator(client).calibrate(2) == 100


def test_calibrate_payloads_are_short_random_alnum():
    client = SequenceClient([(200, 1)] * 20)
    Calibrator(client).calibrate(20)
    for p in client.sent:
        assert 4 <= len(p) < 10
        assert p.isalnum()


def test_calibrate_zero_samples_sends_nothing():
    client = SequenceClient([])
    assert Calibrator(client).calibrate(0) == 0
    assert client.sent == []


def test_calibrate_negative_samples_rejected():
    with pytest.raises(ConfigurationError):
        Calibrator(SequenceClient([])).calibrate(-1)


def test_calibrate_status_mismatch_is_fatal():
    client = SequenceClient([(200, 100), (500, 120), (200, 140)])
    with pytest.raises(CalibrationInconsistency) as exc_info:
        Calibrator(client).calibrate(3)
    assert exc_info.value.expected == 200
    assert exc_info.value.received == 500


def test_calibrate_transport_error_propagates():
    class Broken:
        def send(self, payload):
            raise TransportError("ConnectError: refused", payload=payload)

    with pytest.raises(TransportError):
        Calibrator(Broken()).calibrate(2)


def test_filter_signatures_drops_vanilla_matches(fake_client_factory, make_response):
    client = fake_client_factory({"": make_response("", body="<b>Warning: deprecated</b> hello")})
    kept = Calibrator(client).filter_signatures(["warning", "sql syntax"], apply=True)
    assert kept == ("sql syntax",)
    assert client.sent == [""]


def test_filter_signatures_disabled_keeps_catalog(fake_client_factory):
    client = fake_client_factory()
    kept = Calibrator(client).filter_signatures(["Warning", "sql syntax"], apply=False)
    assert kept == ("warning", "sql syntax")
    assert client.sent == []


def test_filter_signatures_vanilla_failure_is_fatal(fake_client_factory):
    client = fake_client_factory({"": TransportError("ReadTimeout", payload="")})
    with pytest.raises(TransportError):
        Calibrator(client).filter_signatures(["warning"], apply=True)


def test_baseline_uses_offset_override_without_samples(fake_client_factory):
    client = fake_client_factory()
    baseline = Calibrator(client).baseline(0, 350, ["sql syntax"], filtering=False)
    assert baseline.offset_ms == 350
    assert baseline.signatures == ("sql syntax",)


def test_baseline_measured_offset_ignores_override():
    client = SequenceClient([(200, 80), (200, 120), (200, 0)])
    baseline = Calibrator(client).baseline(2, 9999, ["sql syntax"], filtering=True)
    assert baseline.offset_ms == 100
    # the third response was the vanilla request, its body is "ok"
    assert baseline.signatures == ("sql syntax",)


def test_normalize_signatures():
    assert normalize_signatures([" SQL Syntax ", "sql syntax", "", "ORA-00933"]) == \
        ("sql syntax", "ora-00933")


def test_rand_length_bounds():
    for _ in range(50):
        assert 4 <= len(_rand()) < 10
