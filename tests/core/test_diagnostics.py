"""Tests for diagnostics"""

from lua2bind.core.diagnostics import Diagnostic, DiagnosticCode, DiagnosticLog, Severity


class TestDiagnostic:
    """Test suite for Diagnostic records"""

    def test_format(self):
        diagnostic = Diagnostic(DiagnosticCode.NOTHING_EXPOSED, Severity.WARNING,
                                "No exportable members", "nothing here")
        assert diagnostic.format() == "warning LB005: nothing here"

    def test_codes_distinct(self):
        codes = [value for name, value in vars(DiagnosticCode).items() if name.isupper()]
        assert len(codes) == len(set(codes))


class TestDiagnosticLog:
    """Test suite for DiagnosticLog"""

    def test_report_defaults_to_warning(self):
        log = DiagnosticLog()
        diagnostic = log.report(DiagnosticCode.FILE_FAILED, "Error", "failed")

        assert diagnostic.severity == Severity.WARNING
        assert log.diagnostics == [diagnostic]

    def test_has_errors(self):
        log = DiagnosticLog()
        log.report(DiagnosticCode.GENERATION_COMPLETE, "Done", "ok", Severity.INFO)
        assert not log.has_errors()

        log.report(DiagnosticCode.INTERNAL_ERROR, "Boom", "bad", Severity.ERROR)
        assert log.has_errors()

    def test_by_code(self):
        log = DiagnosticLog()
        log.report(DiagnosticCode.FILE_FAILED, "a", "one")
        log.report(DiagnosticCode.PARSE_ERROR, "b", "two")
        log.report(DiagnosticCode.FILE_FAILED, "a", "three")

        assert [d.message for d in log.by_code(DiagnosticCode.FILE_FAILED)] == ["one", "three"]

    def test_extend(self):
        log = DiagnosticLog()
        log.extend([Diagnostic("LB002", Severity.WARNING, "t", "m")])
        assert len(log.diagnostics) == 1

    def test_extend_from_generator(self):
        log = DiagnosticLog()
        log.extend(Diagnostic(code, Severity.WARNING, "t", "m")
                   for code in (DiagnosticCode.PARSE_ERROR, DiagnosticCode.MEMBER_SKIPPED))

        assert [d.code for d in log.diagnostics] == ["LB002", "LB009"]

    def test_summary(self):
        log = DiagnosticLog()
        log.report(DiagnosticCode.FILE_FAILED, "a", "one")
        log.report(DiagnosticCode.GENERATION_COMPLETE, "b", "two", Severity.INFO)

        summary = log.summary()

        assert summary["total"] == 2
        assert summary["by_severity"] == {Severity.WARNING: 1, Severity.INFO: 1}
        assert summary["by_code"] == {"LB001": 1, "LB006": 1}

    def test_format_summary(self):
        log = DiagnosticLog()
        log.report(DiagnosticCode.FILE_FAILED, "a", "one")

        text = log.format_summary()

        assert "=== Diagnostics Summary ===" in text
        assert "Total: 1" in text
        assert "warning: 1" in text
        assert "LB001: 1" in text

    def test_clear(self):
        log = DiagnosticLog()
        log.report(DiagnosticCode.FILE_FAILED, "a", "one")
        log.clear()
        assert log.summary()["total"] == 0
