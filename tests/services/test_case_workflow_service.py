"""
Tests for CaseWorkflowService.

Covers the reporter, reviewer and admin operations plus the public
reads.  Every rejection test also checks that the store is unchanged.
"""

import copy

import pytest

from tests.conftest import CASE_ADMIN, OUTSIDER, REPORTER, REVIEWER
from tracebit_kernel.domain.cases import CaseStatus
from tracebit_kernel.domain.error_codes import CaseErrorCode
from tracebit_kernel.exceptions import NotReporterError


def _snapshot(store):
    return copy.deepcopy(vars(store))


# =========================================================================
# submit_case
# =========================================================================


class TestSubmitCase:
    def test_reporter_submits_valid_case(self, case_service, case_store):
        result = case_service.submit_case(REPORTER, "Case A")

        assert result.success
        assert result.value == 1
        case = case_service.get_case(1).value
        assert case.metadata == "Case A"
        assert case.status == CaseStatus.REPORTED
        assert case.reported_by == REPORTER
        assert case.reviewed_by is None
        assert case_store.next_case_id == 2

    def test_ids_are_sequential(self, case_service):
        ids = [case_service.submit_case(REPORTER, f"Case {n}").value for n in range(3)]
        assert ids == [1, 2, 3]

    def test_empty_metadata_rejected_and_no_id_consumed(self, case_service, case_store):
        before = _snapshot(case_store)

        result = case_service.submit_case(REPORTER, "")

        assert result.error == CaseErrorCode.EMPTY_METADATA
        assert _snapshot(case_store) == before
        assert case_service.submit_case(REPORTER, "Case A").value == 1

    def test_non_reporter_rejected(self, case_service, case_store):
        before = _snapshot(case_store)

        result = case_service.submit_case(OUTSIDER, "Bad")

        assert result.error == CaseErrorCode.NOT_REPORTER
        assert _snapshot(case_store) == before

    def test_reporter_check_precedes_metadata_check(self, case_service):
        assert case_service.submit_case(OUTSIDER, "").error == CaseErrorCode.NOT_REPORTER

    def test_unwrap_raises_for_non_reporter(self, case_service):
        with pytest.raises(NotReporterError):
            case_service.submit_case(OUTSIDER, "Bad").unwrap(caller=OUTSIDER)


# =========================================================================
# mark_under_review
# =========================================================================


class TestMarkUnderReview:
    def test_reviewer_marks_case(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Case A").value

        assert case_service.mark_under_review(REVIEWER, case_id).value is True

        case = case_service.get_case(case_id).value
        assert case.status == CaseStatus.UNDER_REVIEW
        assert case.reviewed_by == REVIEWER
        assert case.metadata == "Case A"
        assert case.reported_by == REPORTER

    def test_second_review_rejected(self, case_service, case_store):
        case_id = case_service.submit_case(REPORTER, "Case A").value
        case_service.mark_under_review(REVIEWER, case_id)
        before = _snapshot(case_store)

        result = case_service.mark_under_review(REVIEWER, case_id)

        assert result.error == CaseErrorCode.INVALID_STATE
        assert _snapshot(case_store) == before

    def test_non_reviewer_rejected(self, case_service, case_store):
        case_id = case_service.submit_case(REPORTER, "Case A").value
        before = _snapshot(case_store)

        result = case_service.mark_under_review(REPORTER, case_id)

        assert result.error == CaseErrorCode.NOT_REVIEWER
        assert _snapshot(case_store) == before

    def test_missing_case(self, case_service):
        assert case_service.mark_under_review(REVIEWER, 42).error == CaseErrorCode.CASE_NOT_FOUND

    def test_reviewer_check_precedes_existence_check(self, case_service):
        assert case_service.mark_under_review(OUTSIDER, 42).error == CaseErrorCode.NOT_REVIEWER

    def test_terminal_case_cannot_reenter_review(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Case A").value
        case_service.mark_under_review(REVIEWER, case_id)
        case_service.finalize_case(REVIEWER, case_id, CaseStatus.REJECTED)

        assert case_service.mark_under_review(REVIEWER, case_id).error == CaseErrorCode.INVALID_STATE


# =========================================================================
# finalize_case
# =========================================================================


class TestFinalizeCase:
    @pytest.fixture
    def reviewed_case(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Case A").value
        case_service.mark_under_review(REVIEWER, case_id)
        return case_id

    @pytest.mark.parametrize("final", [CaseStatus.VERIFIED, CaseStatus.REJECTED])
    def test_finalize_after_review(self, case_service, reviewed_case, final):
        assert case_service.finalize_case(REVIEWER, reviewed_case, final).success

        case = case_service.get_case(reviewed_case).value
        assert case.status == final
        assert case.reviewed_by == REVIEWER

    def test_finalize_twice_rejected(self, case_service, case_store, reviewed_case):
        case_service.finalize_case(REVIEWER, reviewed_case, CaseStatus.VERIFIED)
        before = _snapshot(case_store)

        result = case_service.finalize_case(REVIEWER, reviewed_case, CaseStatus.REJECTED)

        assert result.error == CaseErrorCode.INVALID_STATE
        assert _snapshot(case_store) == before

    def test_cannot_finalize_directly_from_reported(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Case A").value

        result = case_service.finalize_case(REVIEWER, case_id, CaseStatus.VERIFIED)

        assert result.error == CaseErrorCode.INVALID_STATE
        assert case_service.get_case(case_id).value.status == CaseStatus.REPORTED

    @pytest.mark.parametrize(
        "bogus",
        [0, None, "verified", CaseStatus.REPORTED, CaseStatus.UNDER_REVIEW, ["verified"]],
    )
    def test_invalid_final_status(self, case_service, case_store, reviewed_case, bogus):
        before = _snapshot(case_store)

        result = case_service.finalize_case(REVIEWER, reviewed_case, bogus)

        assert result.error == CaseErrorCode.INVALID_FINAL_STATUS
        assert _snapshot(case_store) == before

    @pytest.mark.parametrize("raw", ["verified", "rejected"])
    def test_status_value_string_is_not_a_status(self, case_service, reviewed_case, raw):
        """Strings equal to a member value hash and compare like it but are refused."""
        result = case_service.finalize_case(REVIEWER, reviewed_case, raw)

        assert result.error == CaseErrorCode.INVALID_FINAL_STATUS
        assert case_service.get_case(reviewed_case).value.status == CaseStatus.UNDER_REVIEW

    def test_final_status_checked_before_existence(self, case_service):
        assert case_service.finalize_case(REVIEWER, 42, 0).error == CaseErrorCode.INVALID_FINAL_STATUS

    def test_non_reviewer_rejected(self, case_service, reviewed_case):
        result = case_service.finalize_case(OUTSIDER, reviewed_case, CaseStatus.VERIFIED)
        assert result.error == CaseErrorCode.NOT_REVIEWER

    def test_missing_case(self, case_service):
        result = case_service.finalize_case(REVIEWER, 42, CaseStatus.VERIFIED)
        assert result.error == CaseErrorCode.CASE_NOT_FOUND

    def test_other_reviewer_may_finalize(self, case_service, case_store, reviewed_case):
        case_store.reviewers.add("second.reviewer")

        assert case_service.finalize_case("second.reviewer", reviewed_case, CaseStatus.VERIFIED)
        assert case_service.get_case(reviewed_case).value.reviewed_by == REVIEWER


# =========================================================================
# update_case
# =========================================================================


class TestUpdateCase:
    def test_reporter_updates_before_review(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Draft A").value

        assert case_service.update_case(REPORTER, case_id, "Updated A").success

        case = case_service.get_case(case_id).value
        assert case.metadata == "Updated A"
        assert case.status == CaseStatus.REPORTED

    def test_update_after_review_rejected(self, case_service, case_store):
        case_id = case_service.submit_case(REPORTER, "Draft A").value
        case_service.mark_under_review(REVIEWER, case_id)
        before = _snapshot(case_store)

        result = case_service.update_case(REPORTER, case_id, "Changed")

        assert result.error == CaseErrorCode.ALREADY_REVIEWED
        assert _snapshot(case_store) == before

    def test_non_owner_rejected(self, case_service, case_store):
        case_store.reporters.add("other.reporter")
        case_id = case_service.submit_case(REPORTER, "Draft A").value

        result = case_service.update_case("other.reporter", case_id, "Hijack")

        assert result.error == CaseErrorCode.NOT_OWNER
        assert case_service.get_case(case_id).value.metadata == "Draft A"

    def test_admin_is_not_owner(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Draft A").value
        assert case_service.update_case(CASE_ADMIN, case_id, "x").error == CaseErrorCode.NOT_OWNER

    def test_missing_case(self, case_service):
        assert case_service.update_case(REPORTER, 9, "x").error == CaseErrorCode.CASE_NOT_FOUND

    def test_owner_check_precedes_state_check(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Draft A").value
        case_service.mark_under_review(REVIEWER, case_id)
        assert case_service.update_case(OUTSIDER, case_id, "x").error == CaseErrorCode.NOT_OWNER

    def test_removed_reporter_keeps_edit_rights(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Draft A").value
        case_service.remove_reporter(CASE_ADMIN, REPORTER)

        assert case_service.update_case(REPORTER, case_id, "Still mine").success


# =========================================================================
# Admin operations
# =========================================================================


class TestTransferAdmin:
    def test_admin_transfers(self, case_service, case_store):
        assert case_service.transfer_admin(CASE_ADMIN, "new-admin.test").success
        assert case_store.admin == "new-admin.test"

    def test_previous_admin_loses_rights(self, case_service):
        case_service.transfer_admin(CASE_ADMIN, "new-admin.test")
        assert case_service.transfer_admin(CASE_ADMIN, "x").error == CaseErrorCode.NOT_ADMIN

    def test_non_admin_rejected(self, case_service, case_store):
        result = case_service.transfer_admin(REPORTER, REPORTER)

        assert result.error == CaseErrorCode.NOT_ADMIN
        assert case_store.admin == CASE_ADMIN

    def test_new_admin_not_validated(self, case_service, case_store):
        assert case_service.transfer_admin(CASE_ADMIN, "").success
        assert case_store.admin == ""


class TestRoleManagement:
    def test_grant_reporter(self, case_service):
        assert case_service.add_reporter(CASE_ADMIN, OUTSIDER).success
        assert case_service.submit_case(OUTSIDER, "Now allowed").success

    def test_revoke_reviewer(self, case_service):
        case_id = case_service.submit_case(REPORTER, "Case A").value
        assert case_service.remove_reviewer(CASE_ADMIN, REVIEWER).success
        assert case_service.mark_under_review(REVIEWER, case_id).error == CaseErrorCode.NOT_REVIEWER

    def test_grant_reviewer(self, case_service, case_store):
        case_service.add_reviewer(CASE_ADMIN, OUTSIDER)
        assert OUTSIDER in case_store.reviewers

    def test_revoke_reporter(self, case_service, case_store):
        case_service.remove_reporter(CASE_ADMIN, REPORTER)
        assert case_store.reporters == set()

    def test_grant_and_revoke_are_idempotent(self, case_service, case_store):
        assert case_service.add_reporter(CASE_ADMIN, REPORTER).success
        assert case_service.remove_reviewer(CASE_ADMIN, OUTSIDER).success
        assert case_store.reporters == {REPORTER}
        assert case_store.reviewers == {REVIEWER}

    @pytest.mark.parametrize(
        "operation", ["add_reporter", "remove_reporter", "add_reviewer", "remove_reviewer"]
    )
    def test_non_admin_rejected(self, case_service, case_store, operation):
        before = _snapshot(case_store)

        result = getattr(case_service, operation)(REPORTER, OUTSIDER)

        assert result.error == CaseErrorCode.NOT_ADMIN
        assert _snapshot(case_store) == before


# =========================================================================
# Queries
# =========================================================================


class TestQueries:
    def test_get_missing_case(self, case_service):
        assert case_service.get_case(1).error == CaseErrorCode.CASE_NOT_FOUND

    def test_list_cases_orders_and_filters(self, case_service):
        first = case_service.submit_case(REPORTER, "A").value
        second = case_service.submit_case(REPORTER, "B").value
        case_service.mark_under_review(REVIEWER, second)

        assert [c.case_id for c in case_service.list_cases()] == [first, second]
        assert [c.case_id for c in case_service.list_cases(CaseStatus.REPORTED)] == [first]
        assert [c.case_id for c in case_service.list_cases(CaseStatus.UNDER_REVIEW)] == [second]
        assert case_service.list_cases(CaseStatus.VERIFIED) == []


# =========================================================================
# Logging
# =========================================================================


class TestAuditLogging:
    def test_accepted_operations_log_info(self, case_service, log_capture):
        case_id = case_service.submit_case(REPORTER, "Case A").value
        case_service.mark_under_review(REVIEWER, case_id)
        case_service.finalize_case(REVIEWER, case_id, CaseStatus.VERIFIED)

        records = log_capture.records()
        assert [r["message"] for r in records] == [
            "case_submitted",
            "case_review_started",
            "case_finalized",
        ]
        assert records[0]["actor_id"] == REPORTER
        assert records[0]["operation"] == "submit_case"
        assert records[2]["status"] == "verified"

    def test_rejection_logs_warning_with_code(self, case_service, log_capture):
        case_service.submit_case(OUTSIDER, "Bad")

        (record,) = log_capture.records()
        assert record["level"] == "WARNING"
        assert record["message"] == "case_operation_rejected"
        assert record["error_code"] == "ERR-NOT-REPORTER"
        assert record["actor_id"] == OUTSIDER

    def test_role_grant_logged(self, case_service, log_capture):
        case_service.add_reviewer(CASE_ADMIN, OUTSIDER)
        assert log_capture.messages() == ["reviewer_granted"]
