"""Rich rendering of token check results."""

from __future__ import annotations

from rich.console import Console
from rich.console import ConsoleOptions
from rich.console import RenderResult
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gtokenchecker.errors.messages import describe_error
from gtokenchecker.errors.messages import get_remediation
from gtokenchecker.models import CheckOutcome
from gtokenchecker.models import TokenInfo
from gtokenchecker.models import TokenResult
from gtokenchecker.tokens import mask_token
from gtokenchecker.utils import DEFAULT_DATE_FORMAT
from gtokenchecker.utils import format_time
from gtokenchecker.utils import get_account_creation
from gtokenchecker.utils import get_avatar_url
from gtokenchecker.utils import get_banner_url
from gtokenchecker.utils import get_guild_icon_url
from gtokenchecker.utils import get_user_flags
from gtokenchecker.utils import get_user_permissions

NO_AVATAR = "No avatar provided"
NO_BANNER = "No banner provided"


def display_token(token: str, mask: bool) -> str:
    """Token as it should appear in output."""
    return mask_token(token) if mask else token


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def section_header(title: str) -> Text:
    """Bold title followed by a dim rule, used between report sections."""
    text = Text(title.upper(), style="bold")
    text.append("\n" + "━" * 60, style="dim")
    return text


def _key_value_grid(rows: list[tuple[str, str]]) -> Table:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim", min_width=14)
    grid.add_column()
    for key, value in rows:
        grid.add_row(key, Text(value))
    return grid


def render_identity(
    info: TokenInfo,
    token: str,
    mask: bool = False,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Panel:
    """Panel with the account behind the token."""
    flags = get_user_flags(info.public_flags)
    rows = [
        ("Token", display_token(token, mask)),
        ("ID", info.id),
        ("Username", info.username),
        ("Full name", info.fullname or f"{info.username}#{info.discriminator}"),
        ("Display name", info.global_name or "No display name"),
        ("Created", get_account_creation(info.id, date_format)),
        ("Avatar", info.avatar_url or NO_AVATAR),
        ("Banner", info.banner_url or NO_BANNER),
        ("Banner color", info.banner_color or "No banner color"),
        ("E-mail", info.email or "No e-mail provided"),
        ("Phone", info.phone or "No phone provided"),
        ("Locale", info.locale),
        ("MFA", yes_no(info.mfa_enabled)),
        ("Nitro", info.premium_label),
        ("Flags", ", ".join(flags) if flags else "No public flags available"),
        ("Bio", info.bio or "No bio provided"),
    ]
    return Panel(
        _key_value_grid(rows),
        title=Text(info.fullname or info.username, style="bold cyan"),
        border_style="cyan",
        padding=(0, 1),
    )


def render_connections(result: TokenResult) -> Table | Text:
    if not result.connections:
        return Text("No connections available", style="dim")

    table = Table(show_edge=False, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Visible")
    table.add_column("Verified")
    table.add_column("Revoked")
    for index, connection in enumerate(result.connections, start=1):
        table.add_row(
            str(index),
            connection.connection_type,
            Text(connection.name),
            yes_no(connection.visible),
            yes_no(connection.verified),
            yes_no(connection.revoked),
        )
    return table


def render_relationships(
    result: TokenResult,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Table | Text:
    if not result.relationships:
        return Text("No relationships available", style="dim")

    table = Table(show_edge=False, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Name#tag")
    table.add_column("Nickname")
    table.add_column("Type")
    table.add_column("Flags")
    table.add_column("Since")
    table.add_column("Avatar", overflow="fold")
    for index, relationship in enumerate(result.relationships, start=1):
        user = relationship.user
        flags = get_user_flags(user.public_flags)
        table.add_row(
            str(index),
            relationship.id,
            Text(f"{user.username}#{user.discriminator}"),
            Text(relationship.nickname or "No nickname"),
            relationship.type_label,
            ", ".join(flags) if flags else "-",
            format_time(relationship.since, date_format),
            get_avatar_url(user.id, user.avatar) or NO_AVATAR,
        )
    return table


def render_guilds(result: TokenResult) -> Table | Text:
    if not result.guilds:
        return Text("No guilds available", style="dim")

    table = Table(show_edge=False, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Owner")
    table.add_column("Members", justify="right")
    table.add_column("Permissions", overflow="fold")
    table.add_column("Icon", overflow="fold")
    table.add_column("Banner", overflow="fold")
    for index, guild in enumerate(result.guilds, start=1):
        permissions = get_user_permissions(guild.permissions)
        table.add_row(
            str(index),
            guild.id,
            Text(guild.name),
            yes_no(guild.owner),
            str(guild.approximate_member_count),
            ", ".join(permissions) if permissions else "-",
            get_guild_icon_url(guild.id, guild.icon) or "No icon provided",
            get_banner_url(guild.id, guild.banner) or NO_BANNER,
        )
    return table


def render_boosts(
    result: TokenResult,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Table | Text:
    if not result.boosts:
        return Text("No boosts available", style="dim")

    table = Table(show_edge=False, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Used")
    table.add_column("Subscription ID")
    table.add_column("Guild ID")
    table.add_column("Canceled")
    table.add_column("Cooldown ends")
    for index, boost in enumerate(result.boosts, start=1):
        subscription = boost.premium_guild_subscription
        table.add_row(
            str(index),
            yes_no(boost.is_used),
            boost.subscription_id,
            subscription.guild_id if subscription else "No guild (unused)",
            yes_no(boost.canceled),
            format_time(boost.cooldown_ends_at, date_format),
        )
    return table


def render_promotions(
    result: TokenResult,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Table | Text:
    if not result.promotions:
        return Text("No promotions available", style="dim")

    table = Table(show_edge=False, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Starts")
    table.add_column("Ends")
    table.add_column("Code")
    table.add_column("Link", overflow="fold")
    for index, promotion in enumerate(result.promotions, start=1):
        table.add_row(
            str(index),
            Text(promotion.title or "Unknown"),
            format_time(promotion.starts, date_format),
            format_time(promotion.ends, date_format),
            promotion.code,
            promotion.link or "-",
        )
    return table


def render_nitro(
    result: TokenResult,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> list:
    """Subscriptions, credits and gifts."""
    renderables: list = []

    if result.nitro:
        table = Table(show_edge=False, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("ID")
        table.add_column("Status")
        table.add_column("Period start")
        table.add_column("Period end")
        table.add_column("Canceled")
        for index, subscription in enumerate(result.nitro, start=1):
            table.add_row(
                str(index),
                subscription.id,
                subscription.status_label,
                format_time(subscription.current_period_start, date_format),
                format_time(subscription.current_period_end, date_format),
                format_time(subscription.canceled_at, date_format)
                if subscription.canceled_at
                else "No",
            )
        renderables.append(table)
    else:
        renderables.append(Text("No basic Nitro info available", style="dim"))

    credits = result.nitro_credits
    renderables.append(
        Text(f"Nitro credits: Classic {credits.classic}, Boost {credits.boost}")
    )

    if result.gifts:
        table = Table(show_edge=False, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("ID")
        table.add_column("SKU")
        table.add_column("Plan")
        table.add_column("Consumed")
        for index, gift in enumerate(result.gifts, start=1):
            table.add_row(
                str(index),
                gift.id,
                gift.sku_id,
                gift.plan_name,
                yes_no(gift.consumed),
            )
        renderables.append(table)
    else:
        renderables.append(Text("No gifts available", style="dim"))

    return renderables


class TokenReport:
    """Rich renderable for a successfully checked token.

    Renders the identity panel followed by one section per slot. A rate
    limited result is flagged at the top so that empty sections are not
    mistaken for missing data.
    """

    def __init__(
        self,
        result: TokenResult,
        mask: bool = False,
        date_format: str = DEFAULT_DATE_FORMAT,
        verbose: bool = False,
    ):
        self.result = result
        self.mask = mask
        self.date_format = date_format
        self.verbose = verbose

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        result = self.result
        yield render_identity(result.info, result.token, self.mask, self.date_format)

        if result.rate_limited:
            yield Text(
                "⚠ Some requests were rate-limited; affected sections may be empty.",
                style="yellow",
            )
        if self.verbose and result.failed:
            for slot, reason in result.failed.items():
                yield Text(f"{slot}: {reason}", style="red dim")

        yield section_header("Connections")
        yield render_connections(result)
        yield section_header("Relationships")
        yield render_relationships(result, self.date_format)
        yield section_header("Guilds")
        yield render_guilds(result)
        yield section_header("Boosts")
        yield render_boosts(result, self.date_format)
        yield section_header("Promotions")
        yield render_promotions(result, self.date_format)
        yield section_header("Nitro & Gifts")
        yield from render_nitro(result, self.date_format)
        yield Text()


def render_failure(outcome: CheckOutcome, mask: bool = False) -> Panel:
    """Panel describing a token whose check failed."""
    body = Text()
    if outcome.error is not None:
        body.append(describe_error(outcome.error, len(outcome.attempts) or 1), style="red")
        remediation = get_remediation(outcome.error)
        if remediation:
            body.append("\n")
            body.append_text(Text.from_markup(remediation, style="dim"))
    else:
        body.append("Unknown error", style="red")

    return Panel(
        body,
        title=Text(display_token(outcome.token, mask)),
        border_style="red",
        padding=(0, 1),
    )


def format_summary_line(outcome: CheckOutcome, mask: bool = False) -> str:
    """One line per token for quiet mode."""
    token = display_token(outcome.token, mask)
    if outcome.result is not None:
        status = "valid (rate limited)" if outcome.result.rate_limited else "valid"
        return f"{token} {status}"
    if outcome.error is not None and outcome.error.category == "authentication":
        return f"{token} invalid"
    return f"{token} error"


def display_outcomes(
    console: Console,
    outcomes: list[CheckOutcome],
    mask: bool = False,
    date_format: str = DEFAULT_DATE_FORMAT,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Print every outcome in order."""
    for outcome in outcomes:
        if quiet:
            console.print(
                format_summary_line(outcome, mask),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            continue

        if outcome.result is not None:
            console.print(
                TokenReport(outcome.result, mask=mask, date_format=date_format, verbose=verbose)
            )
        else:
            console.print(render_failure(outcome, mask))

        if verbose and outcome.attempts:
            duration = sum(a.duration_ms for a in outcome.attempts)
            console.print(
                Text(
                    f"{len(outcome.attempts)} attempt(s), {duration}ms",
                    style="dim",
                )
            )
