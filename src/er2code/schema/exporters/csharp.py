"""
C# renderer: entity classes and an Entity Framework Core DbContext.
"""

from typing import Optional

from ..plans import EntityPlan, KeyConfiguration, MappingPlan, ScalarProperty, ScalarType
from .base import CodeRenderer

INDENT = "    "

CSHARP_TYPES = {
    ScalarType.INTEGER: "int",
    ScalarType.TEXT: "string",
    ScalarType.DATETIME: "DateTime",
}


def _key_lines(config: KeyConfiguration) -> list[str]:
    keys = ", ".join(f"e.{name}" for name in config.properties)
    return [
        f"{INDENT * 2}modelBuilder.Entity<{config.class_name}>()",
        f"{INDENT * 3}.HasKey(e => new {{ {keys} }});",
    ]


class CSharpRenderer(CodeRenderer):
    """Renders plans as C# classes and an EF Core DbContext"""

    target = "csharp"

    def __init__(self, context_name: str = "AppDbContext", namespace: Optional[str] = None):
        self.context_name = context_name
        self.namespace = namespace

    def type_name(self, scalar_type: ScalarType) -> str:
        return CSHARP_TYPES[scalar_type]

    def _header(self) -> list[str]:
        if not self.namespace:
            return []
        return [f"namespace {self.namespace};", ""]

    def property_line(self, prop: ScalarProperty) -> str:
        type_name = self.type_name(prop.scalar_type)
        if prop.scalar_type is ScalarType.TEXT:
            declared = "string?" if prop.nullable else "required string"
        else:
            declared = f"{type_name}?" if prop.nullable else type_name
        return f"{INDENT}public {declared} {prop.name} {{ get; set; }}"

    def render_class(self, plan: EntityPlan) -> list[str]:
        lines = [f"public class {plan.class_name}", "{"]
        lines.extend(self.property_line(prop) for prop in plan.properties)

        if plan.navigations:
            lines.append("")
            lines.append(f"{INDENT}// Navigation properties")

        for nav in plan.navigations:
            if nav.is_collection:
                lines.append(
                    f"{INDENT}public ICollection<{nav.target}> {nav.name} "
                    f"{{ get; set; }} = new List<{nav.target}>();"
                )
            else:
                lines.append(f"{INDENT}public {nav.target}? {nav.name} {{ get; set; }}")

        lines.append("}")
        return lines

    def render_entities(self, plans: list[EntityPlan]) -> str:
        lines = self._header()
        for plan in plans:
            lines.extend(self.render_class(plan))
            lines.append("")
        return "\n".join(lines) + "\n" if lines else ""

    def render_mapping(self, plan: MappingPlan) -> str:
        name = self.context_name
        lines = self._header() + [
            "using Microsoft.EntityFrameworkCore;",
            "",
            f"public class {name} : DbContext",
            "{",
            f"{INDENT}public {name}(DbContextOptions<{name}> options) : base(options)",
            f"{INDENT}{{",
            f"{INDENT}}}",
            "",
        ]

        for surface in plan.query_surfaces:
            lines.append(
                f"{INDENT}public DbSet<{surface.class_name}> {surface.name} "
                "{ get; set; } = default!;"
            )

        lines += [
            "",
            f"{INDENT}protected override void OnModelCreating(ModelBuilder modelBuilder)",
            f"{INDENT}{{",
        ]

        if plan.ownerships:
            lines.append(f"{INDENT * 2}// Configure owned entities")
            for ownership in plan.ownerships:
                lines.append(f"{INDENT * 2}modelBuilder.Entity<{ownership.owner}>()")
                lines.append(f"{INDENT * 3}.OwnsOne(e => e.{ownership.navigation});")
            lines.append("")

        if plan.composite_keys:
            lines.append(f"{INDENT * 2}// Configure composite keys")
            for config in plan.composite_keys:
                lines.extend(_key_lines(config))
            lines.append("")

        if plan.keyless:
            lines.append(f"{INDENT * 2}// Configure keyless entities")
            for class_name in plan.keyless:
                lines.append(f"{INDENT * 2}modelBuilder.Entity<{class_name}>()")
                lines.append(f"{INDENT * 3}.HasNoKey();")
            lines.append("")

        if plan.join_table_keys:
            lines.append(f"{INDENT * 2}// Configure many-to-many join tables")
            for config in plan.join_table_keys:
                lines.extend(_key_lines(config))

        lines += [f"{INDENT}}}", "}"]
        return "\n".join(lines) + "\n"
