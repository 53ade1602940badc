import pytest

from snip.analysis_types import (
    AnalysisType,
    DatabaseType,
    DBAnalysis,
    OutputType,
    new_db_analysis,
)


def test_new_db_analysis_is_pending():
    analysis = new_db_analysis(
        "daily", DatabaseType.ORACLE, AnalysisType.AWR, OutputType.MARKDOWN
    )
    assert analysis.status == "pending"
    assert analysis.title == "daily"
    assert analysis.result == ""
    assert analysis.error_message == ""


def test_new_db_analysis_timestamps_equal():
    analysis = new_db_analysis("t", "mysql", "mysql_locks", "json")
    assert analysis.created_at == analysis.updated_at


def test_new_db_analysis_converts_strings():
    analysis = new_db_analysis("t", "sqlserver", "running_queries", "html")
    assert analysis.database_type is DatabaseType.SQLSERVER
    assert analysis.analysis_type is AnalysisType.RUNNING_QUERIES
    assert analysis.output_type is OutputType.HTML


def test_new_db_analysis_rejects_unknown_analysis():
    with pytest.raises(ValueError):
        new_db_analysis("t", "oracle", "not_an_analysis", "text")


def test_new_db_analysis_rejects_unknown_output():
    with pytest.raises(ValueError):
        new_db_analysis("t", "oracle", "awr", "pdf")


@pytest.mark.parametrize(
    "value, member",
    [
        ("error_knowledge", AnalysisType.ERROR_KNOWLEDGE),
        ("postgres_fragmentation", AnalysisType.POSTGRES_FRAGMENTATION),
        ("rac_listener", AnalysisType.RAC_LISTENER),
        ("chat", AnalysisType.CHAT),
        ("pdbs", AnalysisType.PDBS),
    ],
)
def test_analysis_type_lookup_by_value(value, member):
    assert AnalysisType(value) is member
    assert str(member) == value


def test_every_analysis_value_builds_its_own_analysis():
    built = [
        new_db_analysis("t", "oracle", member.value, "text").analysis_type
        for member in AnalysisType
    ]
    assert built == list(AnalysisType)
    assert len({analysis_type.value for analysis_type in built}) == len(built)


def test_output_type_compares_equal_to_string():
    analysis = new_db_analysis("t", "postgresql", "postgres_locks", "markdown")
    assert analysis.output_type == "markdown"
    assert str(new_db_analysis("t", "mysql", "mysql_locks", "json").output_type) == "json"


def test_database_type_round_trip():
    for member in DatabaseType:
        assert DatabaseType(member.value) is member


def test_dbanalysis_defaults():
    analysis = DBAnalysis(
        title="x",
        database_type=DatabaseType.MONGODB,
        analysis_type=AnalysisType.SHARDING,
        output_type=OutputType.TEXT,
    )
    assert analysis.status == "pending"
    assert analysis.id == 0
    assert analysis.log_file_path == ""