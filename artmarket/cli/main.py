"""
ArtMarket CLI - Command Line Interface for the marketplace

Main entry point for all CLI commands. State is kept in a SQLite database
under --data-dir; --caller sets the identity the operation runs as.
"""

import json
from pathlib import Path

import click

from artmarket.core.config import load_config
from artmarket.core.market import Marketplace
from artmarket.core.result import Result
from artmarket.utils.logger import setup_logging


def _as_json(value):
    if isinstance(value, list):
        return [item.to_dict() for item in value]
    return value.to_dict()


def emit(result: Result):
    """Print a result as JSON, or the error message with exit code 1."""
    if result.ok:
        click.echo(json.dumps(_as_json(result.value), indent=2))
        return
    click.echo(f"❌ {result.error}", err=True)
    raise SystemExit(1)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--data-dir", default=None, help="Data directory (default: ARTMARKET_DATA_DIR or ./data)")
@click.option("--config", "config_path", default=None, help="JSON config file")
@click.option("--caller", default=None, help="Principal performing the operation")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, data_dir, config_path, caller):
    """ArtMarket - tokenized artwork marketplace"""
    config = load_config(config_path)
    if data_dir:
        config.data_dir = Path(data_dir).expanduser()

    setup_logging(config, debug=debug)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["caller"] = caller


def _market(ctx) -> Marketplace:
    if "market" not in ctx.obj:
        ctx.obj["market"] = Marketplace.from_config(ctx.obj["config"])
    return ctx.obj["market"]


# =============================================================================
# Artist Commands
# =============================================================================

@cli.group()
def artist():
    """Artist profile commands"""
    pass


@artist.command("create")
@click.option("--name", required=True, help="Display name")
@click.option("--wallet", "wallet_address", required=True, help="64-char hex wallet address")
@click.option("--email", required=True, help="Contact email")
@click.pass_context
def artist_create(ctx, name, wallet_address, email):
    """Register an artist profile owned by --caller"""
    emit(_market(ctx).create_artist_profile(ctx.obj["caller"], name, wallet_address, email))


@artist.command("show")
@click.argument("artist_id")
@click.pass_context
def artist_show(ctx, artist_id):
    """Show an artist profile"""
    emit(_market(ctx).get_artist(artist_id))


@artist.command("tokens")
@click.argument("artist_id")
@click.pass_context
def artist_tokens(ctx, artist_id):
    """List tokens held by an artist"""
    emit(_market(ctx).list_artist_tokens(artist_id))


# =============================================================================
# Artwork Commands
# =============================================================================

@cli.group()
def artwork():
    """Artwork commands"""
    pass


@artwork.command("mint")
@click.option("--artist", "artist_id", required=True, help="Artist id")
@click.option("--title", required=True)
@click.option("--description", required=True)
@click.option("--image-url", required=True)
@click.pass_context
def artwork_mint(ctx, artist_id, title, description, image_url):
    """Register an artwork"""
    emit(_market(ctx).mint_artwork(artist_id, title, description, image_url))


@artwork.command("show")
@click.argument("artwork_id")
@click.pass_context
def artwork_show(ctx, artwork_id):
    """Show an artwork"""
    emit(_market(ctx).get_artwork(artwork_id))


# =============================================================================
# NFT Commands
# =============================================================================

@cli.group()
def nft():
    """Token commands"""
    pass


@nft.command("mint")
@click.option("--artwork", "artwork_id", required=True, help="Artwork id")
@click.option("--price", required=True, type=int, help="Listing price")
@click.pass_context
def nft_mint(ctx, artwork_id, price):
    """Mint a token for an artwork"""
    emit(_market(ctx).mint_nft(artwork_id, price))


@nft.command("show")
@click.argument("token_id")
@click.pass_context
def nft_show(ctx, token_id):
    """Show a token"""
    emit(_market(ctx).get_token(token_id))


@nft.command("history")
@click.argument("token_id")
@click.pass_context
def nft_history(ctx, token_id):
    """List every auction held for a token"""
    emit(_market(ctx).list_token_auction_history(token_id))


# =============================================================================
# Auction Commands
# =============================================================================

@cli.group()
def auction():
    """Auction commands"""
    pass


@auction.command("create")
@click.argument("token_id")
@click.pass_context
def auction_create(ctx, token_id):
    """Open an auction for a token (creator = --caller)"""
    emit(_market(ctx).create_auction(ctx.obj["caller"], token_id))


@auction.command("bid")
@click.argument("auction_id")
@click.option("--bidder", "bidder_id", required=True, help="Bidding artist id")
@click.option("--amount", required=True, type=int, help="Bid amount")
@click.pass_context
def auction_bid(ctx, auction_id, bidder_id, amount):
    """Place a bid"""
    emit(_market(ctx).place_bid(auction_id, bidder_id, amount))


@auction.command("cancel")
@click.argument("auction_id")
@click.pass_context
def auction_cancel(ctx, auction_id):
    """Cancel an auction (creator only)"""
    emit(_market(ctx).cancel_auction(ctx.obj["caller"], auction_id))


@auction.command("finalize")
@click.argument("auction_id")
@click.pass_context
def auction_finalize(ctx, auction_id):
    """Finalize an auction and settle it to the highest bidder (creator only)"""
    emit(_market(ctx).finalize_auction(ctx.obj["caller"], auction_id))


@auction.command("show")
@click.argument("auction_id")
@click.pass_context
def auction_show(ctx, auction_id):
    """Show an auction"""
    emit(_market(ctx).get_auction(auction_id))


@auction.command("active")
@click.pass_context
def auction_active(ctx):
    """List active auctions"""
    emit(_market(ctx).list_active_auctions())


@auction.command("completed")
@click.pass_context
def auction_completed(ctx):
    """List completed auctions"""
    emit(_market(ctx).list_completed_auctions())


# =============================================================================
# Transaction Commands
# =============================================================================

@cli.group()
def tx():
    """Sale transaction commands"""
    pass


@tx.command("show")
@click.argument("transaction_id")
@click.pass_context
def tx_show(ctx, transaction_id):
    """Show a sale transaction"""
    emit(_market(ctx).get_transaction(transaction_id))


# =============================================================================
# Stats / Demo Commands
# =============================================================================


@cli.command("stats")
@click.pass_context
def stats(ctx):
    """Show marketplace statistics"""
    click.echo("ArtMarket Statistics")
    click.echo("-" * 40)
    for key, value in _market(ctx).stats().items():
        click.echo(f"  {key}: {value}")


@cli.command("demo")
def demo():
    """Run an in-memory auction walkthrough"""
    market = Marketplace()
    seller, stranger = "principal-seller", "principal-stranger"

    click.echo("=" * 60)
    click.echo("  ARTMARKET - DEMO")
    click.echo("=" * 60)
    click.echo()

    click.echo("🎨 Registering artists...")
    creator = market.create_artist_profile(seller, "Ada", "a" * 64, "ada@example.com").unwrap()
    x = market.create_artist_profile("principal-x", "Xavier", "b" * 64, "x@example.com").unwrap()
    y = market.create_artist_profile("principal-y", "Yoko", "c" * 64, "y@example.com").unwrap()
    click.echo(f"  ✓ {creator.name}, {x.name}, {y.name}")

    work = market.mint_artwork(creator.id, "Dawn", "Oil on canvas", "https://example.com/dawn.png").unwrap()
    token = market.mint_nft(work.id, 50).unwrap()
    click.echo(f"  ✓ Token minted: {token.id[:8]}... owners={list(token.owner_ids)}")
    click.echo()

    click.echo("⚖️  Running auction...")
    auction_rec = market.create_auction(seller, token.id).unwrap()
    for bidder, amount in ((x, 100), (y, 100), (y, 150)):
        result = market.place_bid(auction_rec.id, bidder.id, amount)
        outcome = "admitted" if result.ok else f"rejected ({result.error.detail})"
        click.echo(f"  {bidder.name} bids {amount}: {outcome}")

    result = market.finalize_auction(stranger, auction_rec.id)
    click.echo(f"  Stranger finalizes: {result.error}")

    sale = market.finalize_auction(seller, auction_rec.id).unwrap()
    click.echo(f"  ✓ Sold to {y.name} for {sale.price}")

    again = market.finalize_auction(seller, auction_rec.id)
    click.echo(f"  Second finalize: {again.error}")
    click.echo()

    settled = market.get_token(token.id).unwrap()
    click.echo(f"📊 Token status={settled.status.value} owners={list(settled.owner_ids)}")
    click.echo("✅ Demo complete!")


if __name__ == "__main__":
    cli()
