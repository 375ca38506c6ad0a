"""
Test suite for the cohort comparison service.

The tests verify:
1. The end-to-end comparison over two cohorts (statistics, performers, snapshot)
2. Empty cohorts are refused before the model is asked
3. A missing model credential fails before any read
4. Snapshot write failures are logged, not raised
5. Model failures prevent the snapshot write
6. Snapshot history reads
"""

import logging
from unittest.mock import AsyncMock

import pytest

from call_insights.core.errors import (
    ConfigurationError,
    FormatError,
    InsufficientDataError,
    StorageError,
)
from call_insights.services.comparison import (
    INSUFFICIENT_DATA_MESSAGE,
    compare_datasets,
    get_latest_snapshot,
    list_snapshots,
)
from call_insights.tests.conftest import FakeOracle, cohort_fetch, make_call_row


SNAPSHOT_ID = '9d7c1b2a-0e4f-4a6b-8c3d-5e7f9a1b2c3d'

pytestmark = pytest.mark.asyncio


def set_a_rows():
    return [
        make_call_row(call_id='a-90', conversion_likelihood='high', conversion_score=90.0, offset_minutes=0),
        make_call_row(call_id='a-80', conversion_likelihood='high', conversion_score=80.0, offset_minutes=1),
        make_call_row(call_id='a-10', conversion_likelihood='low', conversion_score=10.0, offset_minutes=2),
        make_call_row(call_id='a-50', conversion_likelihood='medium', conversion_score=50.0, offset_minutes=3),
    ]


def set_b_rows():
    return [
        make_call_row(call_id='b-95', dataset_type='set_b', conversion_likelihood='high',
                      conversion_score=95.0, offset_minutes=0),
        make_call_row(call_id='b-5', dataset_type='set_b', conversion_likelihood='low',
                      conversion_score=5.0, offset_minutes=1),
    ]


# =============================================================================
# COMPARE DATASETS
# =============================================================================


class TestCompareDatasets:
    """compare_datasets orchestration."""

    async def test_two_cohort_comparison(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
        fake_oracle: FakeOracle,
    ) -> None:
        """
        Arrange: Set A with 4 analyzed calls, Set B with 2
        Act: compare the datasets
        Assert: statistics, performer lists, one model call and one snapshot write
        """
        mock_conn.fetch.side_effect = cohort_fetch(set_a_rows(), set_b_rows())
        mock_conn.fetchval.return_value = SNAPSHOT_ID

        result = await compare_datasets(fake_oracle)

        assert result.success is True
        assert result.setAStats.totalCalls == 4
        assert result.setAStats.conversionRate == 50.0
        assert result.setBStats.totalCalls == 2
        assert result.setBStats.conversionRate == 50.0
        assert result.topPerformers.setA[0].id == 'a-90'
        assert result.bottomPerformers.setA[0].id == 'a-10'
        assert result.topPerformers.setB[0].id == 'b-95'
        assert result.bottomPerformers.setB[0].id == 'b-5'
        assert result.comparison == fake_oracle.comparison

        assert len(fake_oracle.compare_calls) == 1
        set_a, set_b = fake_oracle.compare_calls[0]
        assert set_a.stats == result.setAStats
        assert [c.id for c in set_b.calls] == ['b-95', 'b-5']

        mock_conn.fetchval.assert_awaited_once()

    async def test_snapshot_values(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
        fake_oracle: FakeOracle,
    ) -> None:
        """The snapshot stores both cohorts' headline figures and the model's blocks."""
        mock_conn.fetch.side_effect = cohort_fetch(set_a_rows(), set_b_rows())
        mock_conn.fetchval.return_value = SNAPSHOT_ID

        await compare_datasets(fake_oracle)

        params = mock_conn.fetchval.call_args.args[1:]
        assert params[0] == 4
        assert params[1] == 50.0
        assert params[4] == 2
        assert params[5] == 50.0
        assert params[8] == fake_oracle.comparison.performance_difference_analysis
        assert params[11] == fake_oracle.comparison.actionable_insights

    async def test_performer_limit_applies(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
        fake_oracle: FakeOracle,
    ) -> None:
        mock_conn.fetch.side_effect = cohort_fetch(set_a_rows(), set_b_rows())

        result = await compare_datasets(fake_oracle, performer_limit=2)

        assert [c.id for c in result.topPerformers.setA] == ['a-90', 'a-80']
        assert [c.id for c in result.bottomPerformers.setA] == ['a-10', 'a-50']

    @pytest.mark.parametrize('empty_cohort', ['set_a', 'set_b'])
    async def test_empty_cohort_is_refused(
        self,
        empty_cohort: str,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
        fake_oracle: FakeOracle,
    ) -> None:
        """
        Arrange: one cohort has no analyzed calls
        Act: compare the datasets
        Assert: InsufficientDataError, no model call, no snapshot
        """
        a_rows = [] if empty_cohort == 'set_a' else set_a_rows()
        b_rows = [] if empty_cohort == 'set_b' else set_b_rows()
        mock_conn.fetch.side_effect = cohort_fetch(a_rows, b_rows)

        with pytest.raises(InsufficientDataError) as exc_info:
            await compare_datasets(fake_oracle)

        assert exc_info.value.message == INSUFFICIENT_DATA_MESSAGE
        assert fake_oracle.compare_calls == []
        mock_conn.fetchval.assert_not_called()

    async def test_missing_credential_reads_nothing(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
    ) -> None:
        with pytest.raises(ConfigurationError):
            await compare_datasets(None)

        mock_conn.fetch.assert_not_called()

    async def test_fetch_failure_is_storage_error(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
        fake_oracle: FakeOracle,
    ) -> None:
        mock_conn.fetch.side_effect = Exception('connection refused')

        with pytest.raises(StorageError) as exc_info:
            await compare_datasets(fake_oracle)

        assert exc_info.value.message == 'Error fetching call data'
        assert fake_oracle.compare_calls == []

    async def test_model_failure_skips_snapshot(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
    ) -> None:
        mock_conn.fetch.side_effect = cohort_fetch(set_a_rows(), set_b_rows())
        oracle = FakeOracle(error=FormatError('Failed to parse AI comparison response'))

        with pytest.raises(FormatError):
            await compare_datasets(oracle)

        mock_conn.fetchval.assert_not_called()

    @pytest.mark.intentional
    async def test_snapshot_failure_is_swallowed(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
        fake_oracle: FakeOracle,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """
        Arrange: the snapshot insert fails
        Act: compare the datasets
        Assert: the comparison is still returned and the failure is logged

        The caller keeps a finished comparison even when it cannot be stored.
        """
        mock_conn.fetch.side_effect = cohort_fetch(set_a_rows(), set_b_rows())
        mock_conn.fetchval.side_effect = Exception('insert failed')

        with caplog.at_level(logging.ERROR, logger='call_insights.services.comparison'):
            result = await compare_datasets(fake_oracle)

        assert result.success is True
        assert result.setAStats.totalCalls == 4
        assert 'Error storing comparison results' in caplog.text


# =============================================================================
# SNAPSHOT HISTORY
# =============================================================================


def snapshot_row(snapshot_id: str = SNAPSHOT_ID):
    return {
        'id': snapshot_id,
        'analysis_date': None,
        'created_at': None,
        'set_a_total_calls': 4,
        'set_a_conversion_rate': 50.0,
        'set_a_avg_sentiment': 0.0,
        'set_a_avg_engagement': 50.0,
        'set_b_total_calls': 2,
        'set_b_conversion_rate': 50.0,
        'set_b_avg_sentiment': 0.0,
        'set_b_avg_engagement': 50.0,
        'performance_difference_analysis': {'better_performing_set': 'set_b'},
        'correlation_patterns': {},
        'statistical_significance': {},
        'ai_recommendations': [],
    }


class TestSnapshots:
    """Reading stored comparison snapshots."""

    async def test_list_snapshots(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
    ) -> None:
        mock_conn.fetch.return_value = [snapshot_row()]

        snapshots = await list_snapshots(limit=5)

        assert len(snapshots) == 1
        assert snapshots[0].id == SNAPSHOT_ID
        assert snapshots[0].set_a_total_calls == 4
        assert mock_conn.fetch.call_args.args[1] == 5

    async def test_latest_snapshot_none_when_empty(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
    ) -> None:
        mock_conn.fetch.return_value = []

        assert await get_latest_snapshot() is None

    async def test_list_failure_is_storage_error(
        self,
        mock_database: AsyncMock,
        mock_conn: AsyncMock,
    ) -> None:
        mock_conn.fetch.side_effect = Exception('timeout')

        with pytest.raises(StorageError):
            await list_snapshots()
