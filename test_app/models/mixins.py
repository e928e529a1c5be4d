class Archivable:
    archived = False

    def archive(self):
        self.archived = True


class Auditable(Archivable):
    def audit_label(self) -> str:
        return f"{type(self).__name__}#{self.pk}"


class HasReference:
    def reference(self) -> str:
        return f"REF-{self.pk}"
