"""
HTML templates for the public gallery page.
Gradient card deck with swipe gestures, submission modal and legal links.
"""

import json
from html import escape
from typing import Any, Dict

from linkswipe.domain.models.profile import ProfileModel
from linkswipe.domain.models import swipe

_PLATFORM_LOGOS = {
    "instagram": "https://upload.wikimedia.org/wikipedia/commons/e/e7/Instagram_logo_2016.svg",
    "twitter": "https://upload.wikimedia.org/wikipedia/commons/6/6f/Logo_of_Twitter.svg",
    "x": "https://upload.wikimedia.org/wikipedia/commons/6/6f/Logo_of_Twitter.svg",
    "facebook": "https://upload.wikimedia.org/wikipedia/commons/5/51/Facebook_f_logo_%282019%29.svg",
    "tiktok": "https://upload.wikimedia.org/wikipedia/commons/8/85/TikTok_logo.svg",
    "youtube": "https://upload.wikimedia.org/wikipedia/commons/4/42/YouTube_icon_%282013-2017%29.png",
}
_DEFAULT_LOGO = "https://upload.wikimedia.org/wikipedia/commons/9/91/Globe_icon.svg"

SUBMIT_PLATFORMS = [
    ("Instagram", "Instagram"),
    ("Twitter", "X / Twitter"),
    ("Facebook", "Facebook"),
    ("TikTok", "TikTok"),
]


def get_platform_logo(platform: str) -> str:
    """Logo URL for a platform label, globe icon when unknown."""
    return _PLATFORM_LOGOS.get((platform or "").strip().lower(), _DEFAULT_LOGO)


def get_swipe_config() -> Dict[str, Any]:
    """Gesture constants handed to the page script."""
    return {
        "threshold": swipe.SWIPE_THRESHOLD_PX,
        "maxRotation": swipe.MAX_ROTATION_DEG,
        "rotationDivisor": swipe.ROTATION_DIVISOR,
        "minOpacity": swipe.MIN_OPACITY,
        "opacityFalloff": swipe.OPACITY_FALLOFF_PX,
        "flingOffset": swipe.FLING_OFFSET_PX,
        "flingRotation": swipe.FLING_ROTATION_DEG,
    }


def _script_json(data: Any) -> str:
    """JSON safe to embed inside a script element."""
    return (
        json.dumps(data)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_profile_card(profile: ProfileModel, position: int, cursor: int = 0) -> str:
    """Markup for one card; only the card at the cursor is visible."""
    hidden = "" if position == cursor else " hidden"
    platform = profile.platform or ""
    return f"""
        <article class="card" data-index="{position}" data-link="{escape(profile.link)}"{hidden}>
            <img class="card-photo" src="{escape(profile.photo_url)}" alt="{escape(profile.name)}" draggable="false">
            <div class="card-info">
                <div class="card-header">
                    <div>
                        <h3>{escape(profile.name)}</h3>
                        <p class="card-description">{escape(profile.description)}</p>
                    </div>
                    <img class="platform-logo" src="{get_platform_logo(platform)}" alt="{escape(platform)} logo" width="40" height="40">
                </div>
                <div class="card-actions">
                    <p class="hint">Tap to open profile</p>
                    <div class="buttons">
                        <button type="button" class="pass" data-decision="pass" aria-label="Pass">&#10006;</button>
                        <button type="button" class="open" data-decision="open" aria-label="Open Profile">&#10003;</button>
                    </div>
                </div>
            </div>
        </article>"""


def render_submission_form(price_label: str) -> str:
    options = "\n".join(
        f'                    <option value="{escape(value)}">{escape(label)}</option>'
        for value, label in SUBMIT_PLATFORMS
    )
    return f"""
    <div class="modal" id="form-modal" hidden>
        <div class="modal-backdrop" data-close></div>
        <div class="modal-panel">
            <div class="modal-title">
                <h3>Promote Your Profile ({escape(price_label)})</h3>
                <button type="button" class="close" data-close aria-label="Close">&#10006;</button>
            </div>
            <form id="profile-form" enctype="multipart/form-data">
                <label>Name<input name="name" required></label>
                <label>Email<input name="email" type="email" required></label>
                <label>Description<textarea name="description" rows="3" maxlength="200" required></textarea></label>
                <label>Platform
                <select name="platform" required>
{options}
                </select></label>
                <label>Profile link<input name="link" type="url" required></label>
                <label>Photo<input name="photoFile" type="file" accept="image/*" required></label>
                <label class="agreement"><input type="checkbox" name="agreement">
                    <span>I agree to the <a href="/legal/terms">Terms</a>, <a href="/legal/privacy">Privacy Policy</a> and <a href="/legal/disclaimer">Legal Disclaimer</a>.</span>
                </label>
                <p class="form-status" id="form-status"></p>
                <button type="submit" class="submit">Submit &amp; Pay ({escape(price_label)})</button>
            </form>
        </div>
    </div>"""


def get_gallery_template(
    deck: swipe.SwipeDeck,
    app_name: str,
    price_label: str,
    submit_url: str,
    year: int,
) -> str:
    """
    Generate the gallery page.

    Args:
        deck: Deck of approved profiles positioned at its cursor
        app_name: Site title
        price_label: Promotion price shown on the form
        submit_url: Submission endpoint the form posts to
        year: Copyright year

    Returns:
        Complete HTML document
    """
    cards = "".join(
        render_profile_card(profile, i, deck.index) for i, profile in enumerate(deck.profiles)
    )
    empty_hidden = "" if deck.is_exhausted else " hidden"
    config = {
        "swipe": get_swipe_config(),
        "start": deck.index,
        "total": len(deck),
        "submitUrl": submit_url,
    }
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(app_name)} - Discover Social Profiles</title>
    <style>{GALLERY_STYLES}</style>
</head>
<body>
    <header>
        <h1>{escape(app_name)}</h1>
        <nav>
            <a href="/legal/terms">Terms</a>
            <a href="/legal/privacy">Privacy</a>
            <a href="/legal/disclaimer">Legal</a>
            <button type="button" id="promote">Promote Profile</button>
        </nav>
    </header>
    <main>
        <div class="intro">
            <h2>Discover Social Profiles</h2>
            <p>Swipe left to pass, right to open.</p>
        </div>
        <section class="deck" id="deck">{cards}
            <div class="empty" id="empty"{empty_hidden}>
                <p class="empty-title">You&rsquo;ve seen all profiles &#10024;</p>
                <p>Check back later for new profiles.</p>
            </div>
        </section>
    </main>
    {render_submission_form(price_label)}
    <footer>&copy; {year} {escape(app_name)}. All rights reserved.</footer>
    <script id="deck-config" type="application/json">{_script_json(config)}</script>
    <script>{GALLERY_SCRIPT}</script>
</body>
</html>"""


GALLERY_STYLES = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
        font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
        min-height: 100vh;
        color: #FFFFFF;
        background: linear-gradient(135deg, #d946ef, #0ea5e9, #34d399);
    }
    header, main, footer { max-width: 64rem; margin: 0 auto; padding: 1.5rem 1rem; }
    header { display: flex; justify-content: space-between; align-items: center; }
    header h1 { font-size: 1.875rem; font-weight: 800; }
    nav { display: flex; gap: 0.75rem; align-items: center; }
    nav a { color: #FFFFFF; font-size: 0.875rem; }
    nav button, .submit {
        border: 0; border-radius: 0.5rem; padding: 0.4rem 0.9rem;
        color: #FFFFFF; background: rgba(255, 255, 255, 0.15); cursor: pointer;
    }
    .intro { text-align: center; margin-bottom: 1rem; }
    .deck { position: relative; height: 520px; max-width: 28rem; margin: 0 auto; user-select: none; }
    .card, .empty {
        position: absolute; inset: 0; border-radius: 1.5rem; overflow: hidden;
        border: 1px solid rgba(255, 255, 255, 0.15); background: rgba(0, 0, 0, 0.3);
    }
    .card[hidden], .empty[hidden], .modal[hidden] { display: none; }
    .card-photo { width: 100%; height: 80%; object-fit: cover; }
    .card-info {
        position: absolute; left: 0; right: 0; bottom: 0; padding: 1rem 1.25rem;
        background: linear-gradient(to top, rgba(0, 0, 0, 0.6), transparent);
    }
    .card-header, .card-actions { display: flex; justify-content: space-between; align-items: center; }
    .card-header h3 { font-size: 1.5rem; font-weight: 800; }
    .card-description, .hint { font-size: 0.875rem; opacity: 0.85; }
    .buttons { display: flex; gap: 0.75rem; }
    .buttons button {
        width: 3rem; height: 3rem; border: 0; border-radius: 9999px;
        color: #FFFFFF; font-size: 1.1rem; cursor: pointer;
    }
    .buttons .pass { background: #ef4444; }
    .buttons .open { background: #10b981; }
    .empty { display: flex; flex-direction: column; align-items: center; justify-content: center; text-align: center; padding: 2.5rem; }
    .empty-title { font-size: 1.125rem; font-weight: 600; }
    .modal { position: fixed; inset: 0; z-index: 50; display: flex; align-items: center; justify-content: center; padding: 1rem; }
    .modal-backdrop { position: absolute; inset: 0; background: rgba(0, 0, 0, 0.6); }
    .modal-panel {
        position: relative; width: 100%; max-width: 40rem; max-height: 90vh; overflow: auto;
        border-radius: 1.5rem; padding: 1.5rem; background: rgba(30, 30, 40, 0.95);
    }
    .modal-title { display: flex; justify-content: space-between; margin-bottom: 1rem; }
    .close { border: 0; background: transparent; color: #FFFFFF; cursor: pointer; }
    form label { display: block; font-size: 0.875rem; margin-bottom: 0.75rem; }
    form input, form textarea, form select {
        display: block; width: 100%; margin-top: 0.25rem; padding: 0.5rem;
        border: 0; border-radius: 0.25rem; color: #FFFFFF; background: rgba(255, 255, 255, 0.1);
    }
    form .agreement { display: flex; gap: 0.5rem; }
    form .agreement input { width: auto; }
    form .agreement a { color: #FFFFFF; }
    .submit { background: #10b981; margin-top: 0.5rem; }
    footer { text-align: center; font-size: 0.875rem; opacity: 0.8; }
"""


GALLERY_SCRIPT = """
(function () {
    var config = JSON.parse(document.getElementById('deck-config').textContent);
    var swipe = config.swipe;
    var cards = Array.prototype.slice.call(document.querySelectorAll('.card'));
    var empty = document.getElementById('empty');
    var index = config.start;
    var drag = { origin: 0, current: 0, active: false };

    function currentCard() { return index < cards.length ? cards[index] : null; }

    function applyTransform(card, dx, rotation, opacity) {
        card.style.transform = 'translateX(' + dx + 'px) rotate(' + rotation + 'deg)';
        card.style.opacity = String(opacity);
    }

    function transformFor(dx) {
        var rotation = Math.max(-swipe.maxRotation, Math.min(swipe.maxRotation, dx / swipe.rotationDivisor));
        var opacity = Math.max(swipe.minOpacity, 1 - Math.abs(dx) / swipe.opacityFalloff);
        return { rotation: rotation, opacity: opacity };
    }

    function resetTransform(card) {
        card.style.transition = 'transform 200ms ease, opacity 200ms ease';
        applyTransform(card, 0, 0, 1);
        window.setTimeout(function () { card.style.transition = ''; }, 210);
    }

    function showCurrent() {
        cards.forEach(function (card, i) { card.hidden = i !== index; });
        empty.hidden = index < cards.length;
    }

    function decide(decision) {
        var card = currentCard();
        if (!card) { return; }
        if (decision === 'open' && card.dataset.link) {
            window.open(card.dataset.link, '_blank', 'noopener,noreferrer');
        }
        index += 1;
        showCurrent();
    }

    function fling(card, decision) {
        var sign = decision === 'open' ? 1 : -1;
        card.style.transition = 'transform 220ms ease, opacity 220ms ease';
        applyTransform(card, sign * swipe.flingOffset, sign * swipe.flingRotation, 0);
        window.setTimeout(function () { decide(decision); }, 200);
    }

    function pointerX(event) {
        return event.touches && event.touches.length ? event.touches[0].clientX : event.clientX;
    }

    function onDown(event) {
        if (event.target.closest('button')) { return; }
        drag.active = true;
        drag.origin = pointerX(event);
        drag.current = drag.origin;
    }

    function onMove(event) {
        var card = currentCard();
        if (!drag.active || !card) { return; }
        drag.current = pointerX(event);
        var dx = drag.current - drag.origin;
        var t = transformFor(dx);
        applyTransform(card, dx, t.rotation, t.opacity);
    }

    function onUp() {
        var card = currentCard();
        if (!drag.active || !card) { return; }
        var dx = drag.current - drag.origin;
        drag = { origin: 0, current: 0, active: false };
        if (dx > swipe.threshold) { fling(card, 'open'); return; }
        if (dx < -swipe.threshold) { fling(card, 'pass'); return; }
        resetTransform(card);
    }

    cards.forEach(function (card) {
        card.addEventListener('mousedown', onDown);
        card.addEventListener('mousemove', onMove);
        card.addEventListener('mouseup', onUp);
        card.addEventListener('mouseleave', function () { if (drag.active) { onUp(); } });
        card.addEventListener('touchstart', onDown);
        card.addEventListener('touchmove', onMove);
        card.addEventListener('touchend', onUp);
        card.querySelectorAll('button[data-decision]').forEach(function (button) {
            button.addEventListener('click', function (event) {
                event.preventDefault();
                decide(button.dataset.decision);
            });
        });
    });

    var modal = document.getElementById('form-modal');
    var form = document.getElementById('profile-form');
    var status = document.getElementById('form-status');
    document.getElementById('promote').addEventListener('click', function () { modal.hidden = false; });
    modal.querySelectorAll('[data-close]').forEach(function (el) {
        el.addEventListener('click', function () { modal.hidden = true; });
    });

    form.addEventListener('submit', function (event) {
        event.preventDefault();
        if (!form.elements.agreement.checked) {
            status.textContent = 'Please agree to the terms.';
            return;
        }
        status.textContent = 'Submitting your profile...';
        var data = new FormData(form);
        data.delete('agreement');
        fetch(config.submitUrl, { method: 'POST', body: data })
            .then(function (response) {
                return response.json().then(function (body) { return { ok: response.ok, body: body }; });
            })
            .then(function (result) {
                if (!result.ok) { throw new Error(result.body.message || 'Something went wrong.'); }
                status.textContent = 'Profile submitted! Redirecting to payment page...';
                if (result.body.payment_url) { window.location.href = result.body.payment_url; }
            })
            .catch(function (error) {
                status.textContent = 'An error occurred: ' + error.message + '. Please try again.';
            });
    });

    showCurrent();
})();
"""
