# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from radium.app import create_portal, load_review_queue
from radium.config import ConfigurationError, configure_logging
from radium.domain.errors import PortalError
from radium.domain.model import SongFilter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from radium.app import Portal
    from radium.domain.model import Profile
    from radium.domain.review import SongDetails, SongListing

log = logging.getLogger(__name__)


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid UUID: {value}") from exc


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="radium", description="Radium portal administration")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    songs = subparsers.add_parser("songs", help="Review submitted releases")
    songs_sub = songs.add_subparsers(dest="songs_command", required=True)

    songs_list = songs_sub.add_parser("list", help="List the review queue")
    songs_list.add_argument(
        "--filter",
        choices=[song_filter.value for song_filter in SongFilter],
        default=SongFilter.PENDING.value,
        help="Which songs to show (default: %(default)s)",
    )
    songs_list.add_argument("--admin", type=_parse_uuid, required=True, help="Acting admin id")

    songs_show = songs_sub.add_parser("show", help="Show one song and its review history")
    songs_show.add_argument("song", type=_parse_uuid, help="Song id")
    songs_show.add_argument(
        "--as",
        dest="viewer",
        type=_parse_uuid,
        required=True,
        help="Profile id of the viewer (owner or admin)",
    )

    for name, help_text in (
        ("approve", "Approve a pending song"),
        ("reject", "Reject a pending song"),
        ("delete", "Delete a song, its history and its media"),
    ):
        action = songs_sub.add_parser(name, help=help_text)
        action.add_argument("song", type=_parse_uuid, help="Song id")
        action.add_argument("--admin", type=_parse_uuid, required=True, help="Acting admin id")
        if name == "reject":
            action.add_argument("--reason", type=str, default=None, help="Rejection reason")

    users = subparsers.add_parser("users", help="Manage profiles")
    users_sub = users.add_subparsers(dest="users_command", required=True)

    users_list = users_sub.add_parser("list", help="List all profiles")
    users_list.add_argument("--admin", type=_parse_uuid, required=True, help="Acting admin id")

    for name, help_text in (("ban", "Ban a profile"), ("unban", "Lift a ban")):
        action = users_sub.add_parser(name, help=help_text)
        action.add_argument("user", type=_parse_uuid, help="Profile id")
        action.add_argument("--admin", type=_parse_uuid, required=True, help="Acting admin id")

    payouts = users_sub.add_parser("payouts", help="Show or update payout details")
    payouts.add_argument("user", type=_parse_uuid, help="Profile id")
    payouts.add_argument("--admin", type=_parse_uuid, required=True, help="Acting admin id")
    for flag in ("--paypal-email", "--iban", "--swift"):
        payouts.add_argument(
            flag, type=str, default=None, help="Unchanged when omitted; \"\" clears it"
        )

    return parser.parse_args(list(argv))


def _print_listing(listings: Sequence[SongListing]) -> None:
    if not listings:
        print("No songs found.")
        return
    for listing in listings:
        song = listing.song
        print(
            f"{song.id}  {song.status:<8}  {song.created_at:%Y-%m-%d}  "
            f"{song.album_title} by {song.artist_names} (uploaded by {listing.uploader_username})"
        )


def _print_details(details: SongDetails) -> None:
    song = details.song
    print(f"Song:          {song.id}")
    print(f"Album title:   {song.album_title}")
    print(f"Artists:       {song.artist_names}")
    print(f"Uploaded by:   {details.uploader_username}")
    print(f"Release date:  {song.release_date.isoformat()}")
    print(f"Genre:         {song.genre}")
    print(f"Platforms:     {', '.join(platform.value for platform in song.platforms)}")
    print(f"UPC / ISRC:    {song.upc or '-'} / {song.isrc or '-'}")
    print(f"Cover art:     {song.cover_art_url}")
    print(f"Audio file:    {song.audio_file_url}")
    print(f"Status:        {song.status}")
    if song.rejection_reason:
        print(f"Reason:        {song.rejection_reason}")
    if details.history:
        print("History:")
    for view in details.history:
        reason = f": {view.reason}" if view.reason else ""
        print(f"  {view.created_at:%Y-%m-%d %H:%M} {view.status} by {view.actor_username}{reason}")


def _print_profile(profile: Profile) -> None:
    flags = " [banned]" if profile.is_banned else ""
    print(f"{profile.id}  {profile.role:<5}  {profile.username}{flags}")


def _print_payouts(profile: Profile) -> None:
    payout = profile.payout
    print(f"PayPal email:  {payout.paypal_email or '-'}")
    print(f"IBAN:          {payout.bank_account_iban or '-'}")
    print(f"SWIFT:         {payout.bank_account_swift or '-'}")


def _run_songs(portal: Portal, args: argparse.Namespace) -> None:
    command = args.songs_command
    if command == "list":
        _print_listing(
            load_review_queue(portal, actor_id=args.admin, song_filter=SongFilter(args.filter))
        )
    elif command == "show":
        _print_details(portal.review.read(song_id=args.song, viewer_id=args.viewer))
    elif command == "approve":
        song = portal.review.approve(song_id=args.song, actor_id=args.admin)
        print(f"Song {song.id} approved.")
    elif command == "reject":
        song = portal.review.reject(song_id=args.song, actor_id=args.admin, reason=args.reason)
        print(f"Song {song.id} rejected.")
    elif command == "delete":
        deletion = portal.review.delete(song_id=args.song, actor_id=args.admin)
        print(f"Song {deletion.song_id} deleted.")
        for bucket, message in deletion.failures.items():
            print(f"Warning: {bucket} object was not removed: {message}", file=sys.stderr)


def _run_users(portal: Portal, args: argparse.Namespace) -> None:
    command = args.users_command
    if command == "list":
        for profile in portal.accounts.list_profiles(actor_id=args.admin):
            _print_profile(profile)
    elif command in {"ban", "unban"}:
        profile = portal.accounts.set_banned(
            actor_id=args.admin, target_id=args.user, banned=command == "ban"
        )
        _print_profile(profile)
    elif command == "payouts":
        current = portal.accounts.get_profile(actor_id=args.admin, target_id=args.user)
        # flags left out keep their stored value; an empty string clears one
        changes = {
            field_name: value
            for field_name, value in (
                ("paypal_email", args.paypal_email),
                ("bank_account_iban", args.iban),
                ("bank_account_swift", args.swift),
            )
            if value is not None
        }
        if not changes:
            _print_payouts(current)
            return
        profile = portal.accounts.update_payouts(
            actor_id=args.admin,
            target_id=args.user,
            details=replace(current.payout, **changes),
        )
        _print_payouts(profile)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.WARNING)

    try:
        portal = create_portal()
        if parsed_args.command == "songs":
            _run_songs(portal, parsed_args)
        else:
            _run_users(portal, parsed_args)
    except (PortalError, ConfigurationError) as exc:
        log.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
