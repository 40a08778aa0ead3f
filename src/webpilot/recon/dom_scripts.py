"""Read-only queries evaluated inside the live document.

Every script only reports raw attributes and layout facts; classification,
selector choice and ordering happen in Python so that live and static scans
share the same decisions.
"""

from __future__ import annotations

_HELPERS = r"""
  const isVisible = (el) => {
    if (!el.isConnected || el.getClientRects().length === 0) return false;
    const style = window.getComputedStyle(el);
    return style.visibility !== 'hidden' && style.display !== 'none';
  };
  const countMatches = (selector) => {
    try { return document.querySelectorAll(selector).length; } catch (e) { return 0; }
  };
  const classAttr = (el) => el.getAttribute('class');
  const classToken = (el) => {
    const value = (classAttr(el) || '').trim();
    return value ? value.split(/\s+/)[0] : '';
  };
  const idMatches = (el) => (el.id ? countMatches('#' + CSS.escape(el.id)) : 0);
  const classMatches = (el) => {
    const token = classToken(el);
    return token ? countMatches('.' + CSS.escape(token)) : 0;
  };
  const structuralPath = (el, container) => {
    const steps = [];
    let node = el;
    while (node && node.nodeType === 1 && node !== container && node !== document.documentElement) {
      let index = 1;
      for (let sib = node.previousElementSibling; sib; sib = sib.previousElementSibling) {
        if (sib.tagName === node.tagName) index += 1;
      }
      steps.unshift(`${node.tagName.toLowerCase()}:nth-of-type(${index})`);
      node = node.parentElement;
    }
    return steps.join(' > ');
  };
  const labelText = (el) => {
    const label = el.labels && el.labels.length ? el.labels[0] : null;
    return label ? (label.textContent || '').replace(/\s+/g, ' ').trim() || null : null;
  };
  const describeField = (el, container) => ({
    tag: el.tagName.toLowerCase(),
    type: el.tagName === 'INPUT' ? (el.type || 'text').toLowerCase() : el.tagName.toLowerCase(),
    name: el.getAttribute('name'),
    id: el.id || null,
    placeholder: el.getAttribute('placeholder'),
    aria_label: el.getAttribute('aria-label'),
    label: labelText(el),
    class_name: classAttr(el),
    required: !!el.required,
    visible: isVisible(el),
    path: structuralPath(el, container),
    id_matches: idMatches(el),
    class_matches: classMatches(el),
  });
"""

SCAN_SCRIPT = (
    "(scopeSelector) => {"
    + _HELPERS
    + r"""
  const allForms = Array.from(document.querySelectorAll('form'));
  const root = scopeSelector ? document.querySelector(scopeSelector) : document.documentElement;
  if (!root) return { url: location.href, forms: [], loose_fields: [], scope_found: false };
  const forms = root.tagName === 'FORM' ? [root] : Array.from(root.querySelectorAll('form'));
  const fieldsOf = (container) =>
    Array.from(container.querySelectorAll('input, textarea, select')).map((el) => describeField(el, container));
  return {
    url: location.href,
    scope_found: true,
    forms: forms.map((form) => ({
      index: allForms.indexOf(form),
      id: form.id || null,
      class_name: classAttr(form),
      action: form.getAttribute('action') !== null ? form.action : null,
      method: (form.getAttribute('method') || 'get').toLowerCase(),
      path: structuralPath(form, document.documentElement),
      id_matches: idMatches(form),
      class_matches: classMatches(form),
      fields: fieldsOf(form),
    })),
    loose_fields: forms.length === 0 ? fieldsOf(root) : [],
  };
}"""
)

DESCRIBE_FIELD_SCRIPT = (
    "(el) => {"
    + _HELPERS
    + r"""
  return describeField(el, document.documentElement);
}"""
)

SECTION_SCRIPT = (
    "({ pattern, flags, containers }) => {"
    + _HELPERS
    + r"""
  const keywords = new RegExp(pattern, flags);
  const position = (el) => ({
    id: el.id || null,
    class_name: classAttr(el),
    path: structuralPath(el, document.documentElement),
    id_matches: idMatches(el),
    class_matches: classMatches(el),
  });
  const links = Array.from(document.querySelectorAll('a'))
    .filter((link) =>
      keywords.test(link.textContent || '') ||
      keywords.test(link.title || '') ||
      keywords.test(link.getAttribute('href') || ''))
    .map((link) => ({
      tag: 'a',
      text: (link.textContent || '').replace(/\s+/g, ' ').trim(),
      href: link.href || link.getAttribute('href') || '',
      title: link.title || null,
      ...position(link),
    }));
  const regions = Array.from(document.querySelectorAll(containers))
    .filter((el) =>
      keywords.test(el.id || '') ||
      keywords.test(classAttr(el) || '') ||
      (el.tagName === 'SECTION' && keywords.test(el.textContent || '')))
    .map((el) => ({
      tag: el.tagName.toLowerCase(),
      has_form: el.tagName === 'FORM' || el.querySelector('form') !== null,
      text: (el.textContent || '').replace(/\s+/g, ' ').trim().slice(0, 200),
      ...position(el),
    }));
  return { url: location.href, links, regions };
}"""
)

SUBMIT_CANDIDATES_SCRIPT = (
    "({ scopeSelector, pattern }) => {"
    + _HELPERS
    + r"""
  const allForms = Array.from(document.querySelectorAll('form'));
  const scope = scopeSelector ? document.querySelector(scopeSelector) : (allForms[0] || document.body);
  if (!scope) return { scope_found: false, scope_path: '', candidates: [] };
  const submitLike = new RegExp(pattern, 'i');
  const owningForm = (el) => {
    const form = el.form || el.closest('form');
    return form ? allForms.indexOf(form) : null;
  };
  const isDisabled = (el) =>
    !!el.disabled ||
    el.getAttribute('aria-disabled') === 'true' ||
    /(^|\s)disabled(\s|$)/i.test(classAttr(el) || '');
  const interesting = (el) => {
    if (el.tagName === 'BUTTON') return true;
    const type = (el.getAttribute('type') || '').toLowerCase();
    if (el.tagName === 'INPUT' && ['submit', 'button', 'image'].includes(type)) return true;
    return submitLike.test(el.id || '') ||
      submitLike.test(classAttr(el) || '') ||
      submitLike.test(el.getAttribute('onclick') || '');
  };
  const elements = Array.from(scope.querySelectorAll('button, input, a, [role="button"], div, span'));
  return {
    scope_found: true,
    scope_path: structuralPath(scope, document.documentElement),
    candidates: elements.filter(interesting).map((el) => ({
      tag: el.tagName.toLowerCase(),
      type: el.getAttribute('type') ? el.getAttribute('type').toLowerCase() : null,
      id: el.id || null,
      class_name: classAttr(el),
      onclick: el.getAttribute('onclick'),
      text: (el.innerText || el.value || el.textContent || '').replace(/\s+/g, ' ').trim().slice(0, 80),
      disabled: isDisabled(el),
      form_index: owningForm(el),
      path: structuralPath(el, scope),
      id_matches: idMatches(el),
      class_matches: classMatches(el),
    })),
  };
}"""
)

HIGHLIGHT_SCRIPT = """(el) => {
  el.style.outline = '3px solid #ff5722';
  el.style.outlineOffset = '2px';
}"""

NATIVE_SUBMIT_SCRIPT = """(selector) => {
  const target = selector ? document.querySelector(selector) : document.querySelector('form');
  if (!target) throw new Error(`No element matches ${selector || 'form'}`);
  const form = target.tagName === 'FORM' ? target : (target.closest('form') || target.querySelector('form'));
  if (!form) throw new Error('No form element to submit');
  HTMLFormElement.prototype.submit.call(form);
  return true;
}"""
