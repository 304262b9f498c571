"""Application service for guarded credential mutations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from credential_guard.application.ports.credential_repository_port import (
    CredentialRecord,
    CredentialRepositoryPort,
)
from credential_guard.application.ports.password_hasher_port import PasswordHasherPort
from credential_guard.domain.auth.credentials import (
    TRANSIENT_PASSWORD_FIELDS,
    ProfileChanges,
    validate_profile,
)
from credential_guard.domain.auth.field_errors import (
    NOT_COMPLEX_MESSAGE,
    NOT_NEW_MESSAGE,
    ErrorCode,
    FieldErrors,
    too_short_message,
)
from credential_guard.domain.auth.password_policy import (
    PasswordPolicy,
    is_complex_enough,
    is_long_enough,
    is_new_password,
)
from credential_guard.domain.auth.update_states import UpdateState, assert_update_transition

logger = logging.getLogger(__name__)


@dataclass
class CredentialForm:
    """Transient plaintext input for one guarded update attempt.

    Nothing here is persisted; ``clean_up_passwords`` wipes the plaintexts once
    the attempt finishes.
    """

    current_password: str = ""
    password: str = ""
    password_confirmation: str = ""
    changes: ProfileChanges = field(default_factory=ProfileChanges)

    def clean_up_passwords(self) -> None:
        """Reset every plaintext field to empty."""

        self.current_password = ""
        self.password = ""
        self.password_confirmation = ""


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one update attempt.

    On rejection ``record`` carries the tentatively assigned attributes for
    re-display; it was never persisted.
    """

    state: UpdateState
    record: CredentialRecord
    errors: FieldErrors

    @property
    def success(self) -> bool:
        return self.state is UpdateState.APPLIED


@dataclass(frozen=True)
class DestroyResult:
    """Outcome of one guarded destroy attempt."""

    destroyed: bool
    record: CredentialRecord
    errors: FieldErrors

    @property
    def success(self) -> bool:
        return self.destroyed


class CredentialService:
    """Guard credential changes and destructive actions behind password proofs."""

    def __init__(
        self,
        *,
        records: CredentialRepositoryPort,
        password_hasher: PasswordHasherPort,
        policy: PasswordPolicy | None = None,
    ) -> None:
        self._records = records
        self._password_hasher = password_hasher
        self._policy = policy or PasswordPolicy()

    def assign_password(self, record: CredentialRecord, password: str | None) -> CredentialRecord:
        """Return record with a fresh digest of password; blank input leaves it unchanged."""

        if not password:
            return record
        return replace(record, encrypted_password=self._password_hasher.hash_password(password))

    def valid_password(self, record: CredentialRecord, password: str) -> bool:
        """Return whether password matches the record's stored credential."""

        return self._password_hasher.verify_password(
            password=password,
            password_hash=record.encrypted_password,
        )

    def authenticatable_salt(self, record: CredentialRecord) -> str | None:
        return self._password_hasher.authenticatable_salt(record.encrypted_password)

    def update_with_password(self, record: CredentialRecord, form: CredentialForm) -> UpdateResult:
        """Change password and profile together once the current password is proven.

        Every condition is evaluated before any write. The transient plaintexts
        on form are cleared on every exit path, including repository failures.
        """

        state = assert_update_transition(UpdateState.IDLE, UpdateState.VALIDATING)
        try:
            current_password = form.current_password
            password = form.password
            confirmation = form.password_confirmation

            tentative = replace(record, **form.changes.as_dict())
            errors = self._validate_record(tentative)

            current_valid = bool(current_password) and self.valid_password(record, current_password)
            password_new = bool(password) and is_new_password(
                password,
                password_hash=record.encrypted_password,
                hasher=self._password_hasher,
            )
            password_long = is_long_enough(password, min_length=self._policy.min_length)
            password_complex = is_complex_enough(password)

            accepted = (
                bool(current_password)
                and bool(password)
                and bool(confirmation)
                and password_new
                and current_valid
                and password_long
                and password_complex
                and password == confirmation
                and not errors
            )
            if accepted:
                changes = dict(form.changes.as_dict())
                changes["encrypted_password"] = self._password_hasher.hash_password(password)
                updated = self._records.apply_update(record_id=record.record_id, changes=changes)
                state = assert_update_transition(state, UpdateState.APPLIED)
                logger.info("credential_password_updated record_id=%s", record.record_id)
                return UpdateResult(state=state, record=updated, errors=errors)

            if not current_password:
                errors.add("current_password", ErrorCode.BLANK)
            elif not current_valid:
                errors.add("current_password", ErrorCode.INVALID)
            elif not password:
                errors.add("password", ErrorCode.BLANK)
            elif not password_new:
                errors.add("password", ErrorCode.NOT_NEW, NOT_NEW_MESSAGE)
            else:
                self._add_policy_errors(
                    errors,
                    complex_enough=password_complex,
                    long_enough=password_long,
                )
            if password and password != confirmation:
                errors.add("password_confirmation", ErrorCode.INVALID)

            state = assert_update_transition(state, UpdateState.REJECTED)
            logger.info(
                "credential_password_update_rejected record_id=%s fields=%s",
                record.record_id,
                ",".join(field_name for field_name, _ in errors.items()),
            )
            return UpdateResult(state=state, record=tentative, errors=errors)
        finally:
            form.clean_up_passwords()

    def update_without_password(
        self,
        record: CredentialRecord,
        attributes: Mapping[str, object],
        *,
        form: CredentialForm | None = None,
    ) -> UpdateResult:
        """Update profile attributes; password keys are dropped, never applied.

        Raises ``UnknownAttributeError`` when attributes name a non-updatable field.
        """

        state = assert_update_transition(UpdateState.IDLE, UpdateState.VALIDATING)
        try:
            allowed = {
                name: value
                for name, value in attributes.items()
                if name not in TRANSIENT_PASSWORD_FIELDS
            }
            changes = ProfileChanges.from_mapping(allowed).as_dict()
            tentative = replace(record, **changes)
            errors = self._validate_record(tentative)
            if errors:
                state = assert_update_transition(state, UpdateState.REJECTED)
                return UpdateResult(state=state, record=tentative, errors=errors)

            updated = self._records.apply_update(record_id=record.record_id, changes=changes)
            state = assert_update_transition(state, UpdateState.APPLIED)
            logger.info("credential_profile_updated record_id=%s", record.record_id)
            return UpdateResult(state=state, record=updated, errors=errors)
        finally:
            if form is not None:
                form.clean_up_passwords()

    def destroy_with_password(
        self,
        record: CredentialRecord,
        current_password: str | None,
    ) -> DestroyResult:
        """Delete record once current_password matches, else report it on current_password."""

        if current_password and self.valid_password(record, current_password):
            destroyed = self._records.delete(record_id=record.record_id)
            logger.info(
                "credential_record_destroyed record_id=%s destroyed=%s",
                record.record_id,
                destroyed,
            )
            return DestroyResult(destroyed=destroyed, record=record, errors=FieldErrors())

        errors = self._validate_record(record)
        errors.add(
            "current_password",
            ErrorCode.INVALID if current_password else ErrorCode.BLANK,
        )
        logger.info("credential_destroy_rejected record_id=%s", record.record_id)
        return DestroyResult(destroyed=False, record=record, errors=errors)

    def _validate_record(self, record: CredentialRecord) -> FieldErrors:
        return validate_profile(email=record.email, display_name=record.display_name)

    def _add_policy_errors(
        self,
        errors: FieldErrors,
        *,
        complex_enough: bool,
        long_enough: bool,
    ) -> None:
        """Attach complexity and length failures according to the reporting policy."""

        if not complex_enough:
            errors.add("password", ErrorCode.NOT_COMPLEX, NOT_COMPLEX_MESSAGE)
            if not self._policy.report_all_failures:
                return
        if not long_enough:
            errors.add(
                "password",
                ErrorCode.TOO_SHORT,
                too_short_message(self._policy.min_length),
            )
