class GovernanceError(Exception):
    pass


class GovernanceValidationError(GovernanceError):
    pass


class GovernanceCompanyNotFoundError(GovernanceError):
    pass


class GovernanceVersionConflictError(GovernanceError):
    pass


class GovernancePresetNotFoundError(GovernanceError):
    pass
