"""
Basic accessibility checks of the widget page.

Heuristics over the rendered DOM; a full axe-core audit is out of scope.
Priority P2.
"""

import pytest

from widget_e2e.reporting import allure_helper

pytestmark = [pytest.mark.e2e, pytest.mark.accessibility]

INTERACTIVE_TAGS = ("a", "button", "input", "select", "textarea", "body")

EMPTY_LINKS_SCRIPT = """
links => links.filter(link => {
    const text = (link.textContent || '').trim();
    const ariaLabel = link.getAttribute('aria-label') || '';
    return text.length === 0 && ariaLabel.length === 0;
}).length
"""

UNLABELLED_INPUTS_SCRIPT = """
inputs => inputs.filter(input => {
    if (input.getAttribute('aria-label') || input.getAttribute('aria-labelledby')
        || input.getAttribute('placeholder')) {
        return false;
    }
    if (input.id && document.querySelector(`label[for="${input.id}"]`)) {
        return false;
    }
    return true;
}).length
"""

UNNAMED_BUTTONS_SCRIPT = """
buttons => buttons.filter(btn => {
    const text = (btn.textContent || '').trim();
    return text.length === 0 && !btn.getAttribute('aria-label') && !btn.getAttribute('title');
}).length
"""

# Text whose RGB components all exceed 230 is treated as unreadable on white
LOW_CONTRAST_SCRIPT = """
() => {
    let count = 0;
    document.querySelectorAll('p, span, a, h1, h2, h3, h4, h5, h6').forEach(el => {
        const match = getComputedStyle(el).color.match(/rgb\\((\\d+),\\s*(\\d+),\\s*(\\d+)\\)/);
        if (match && +match[1] > 230 && +match[2] > 230 && +match[3] > 230) {
            count++;
        }
    });
    return count;
}
"""

ACTIVE_TAG_SCRIPT = """
() => document.activeElement ? document.activeElement.tagName.toLowerCase() : null
"""

FOCUS_VISIBLE_SCRIPT = """
() => {
    const active = document.activeElement;
    if (!active || active === document.body) {
        return true;
    }
    const style = getComputedStyle(active);
    const outline = style.outline;
    const boxShadow = style.boxShadow;
    return Boolean((outline && outline !== 'none' && !outline.includes('0px'))
        || (boxShadow && boxShadow !== 'none'));
}
"""


class TestAccessibility:
    """Language, alt texts, headings, names and keyboard navigation."""

    @pytest.mark.title("A11Y-01: Страница имеет атрибут lang")
    async def test_html_lang(self, page, widget_page):
        lang = await page.locator("html").get_attribute("lang")
        assert lang

    @pytest.mark.title("A11Y-02: Изображения имеют alt-атрибуты")
    async def test_images_have_alt(self, page, widget_page):
        # decorative images may carry an empty alt
        assert await page.locator("img:not([alt])").count() == 0

    @pytest.mark.title("A11Y-03: Страница имеет основной заголовок h1")
    async def test_has_h1(self, page, widget_page):
        assert await page.locator("h1").count() >= 1

    @pytest.mark.title("A11Y-04: Ссылки имеют различимый текст")
    async def test_links_have_text(self, page, widget_page):
        empty_links = await page.locator("a:not([aria-label])").evaluate_all(
            EMPTY_LINKS_SCRIPT
        )
        # a few icon links are tolerated
        assert empty_links <= 5

    @pytest.mark.title("A11Y-05: Формы имеют связанные labels")
    async def test_inputs_labelled(self, page, widget_page):
        unlabelled = await page.locator(
            'input:not([type="hidden"]):not([type="submit"]):not([type="button"])'
        ).evaluate_all(UNLABELLED_INPUTS_SCRIPT)
        assert unlabelled <= 3

    @pytest.mark.title("A11Y-06: Кнопки имеют доступные имена")
    async def test_buttons_named(self, page, widget_page):
        unnamed = await page.locator("button").evaluate_all(UNNAMED_BUTTONS_SCRIPT)
        assert unnamed <= 2

    @pytest.mark.title("A11Y-07: Контрастность текста (базовая проверка)")
    async def test_text_contrast(self, page, widget_page):
        assert await page.evaluate(LOW_CONTRAST_SCRIPT) <= 5

    @pytest.mark.title("A11Y-08: Страница может быть навигирована с клавиатуры")
    async def test_keyboard_navigation(self, page, widget_page):
        await page.keyboard.press("Tab")
        assert await page.evaluate(ACTIVE_TAG_SCRIPT) in INTERACTIVE_TAGS

    @pytest.mark.title("A11Y-09: Skip-link или навигационные landmarks")
    async def test_landmarks(self, page, widget_page):
        has_main = await page.locator('main, [role="main"]').count() > 0
        has_skip_link = (
            await page.locator('a[href="#main"], a[href="#content"], .skip-link').count() > 0
        )
        has_nav = await page.locator('nav, [role="navigation"]').count() > 0

        assert has_main or has_skip_link or has_nav

    @pytest.mark.title("A11Y-10: Фокус виден при табуляции")
    async def test_focus_visible(self, page, widget_page, run_logger):
        for _ in range(3):
            await page.keyboard.press("Tab")

        if not await page.evaluate(FOCUS_VISIBLE_SCRIPT):
            message = "Focus indicator may not be visible enough"
            run_logger.warning(message)
            allure_helper.attach_text("Warning", message)

    @pytest.mark.title("A11Y-11: Сводка базовых проверок доступности")
    async def test_basic_accessibility_summary(self, widget_page):
        summary = await widget_page.check_basic_accessibility()
        allure_helper.attach_json("Accessibility summary", summary)

        assert summary["has_alt_texts"]
        assert summary["has_lang_attribute"]
