from dataclasses import dataclass


@dataclass(frozen=True)
class CompileContext:
    """Where the compiler currently is inside a custom type.

    ``path`` is the registry path. ``name_path`` holds the segments that take
    part in type names; structural containers (``data``, ``primary``,
    ``items``) appear in the former only.
    """

    custom_type_id: str
    path: tuple[str, ...]
    name_path: tuple[str, ...]

    @classmethod
    def root(cls, custom_type_id: str) -> "CompileContext":
        return cls(custom_type_id, (custom_type_id,), (custom_type_id,))

    def child(self, segment: str, *, named: bool = True) -> "CompileContext":
        return CompileContext(
            self.custom_type_id,
            self.path + (segment,),
            self.name_path + (segment,) if named else self.name_path,
        )
