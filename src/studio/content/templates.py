"""
Generated file templates.

Provides the project layout file, the project listing file, and the body of
a new post. Only the metadata these files embed (display name and folder
name) is kept in sync by the store; the markup around it belongs to the
site's own layouts.
"""

from __future__ import annotations

from studio.content.frontmatter import render_value

LAYOUT_FILENAME = "_layout.astro"
LISTING_FILENAME = "index.astro"
POST_SUFFIX = ".md"

POST_PLACEHOLDER = "Write your content here..."

LAYOUT_TEMPLATE = '''---
import PostLayout from '../../layouts/PostLayout.astro';

export interface Props {{
  title: string;
}}

const {{ title }} = Astro.props;
const projectName = {folder_name};
---

<PostLayout title={{title}} projectName={{projectName}}>
  <slot />
</PostLayout>
'''

LISTING_TEMPLATE = '''---
title: {display_name}
displayName: {display_name}
import ProjectLayout from '../../layouts/ProjectLayout.astro';
import {{ readdir }} from 'node:fs/promises';
import path from 'node:path';

const projectName = {folder_name};
const displayName = {display_name};
const folderName = {folder_name};
const projectDir = path.join(process.cwd(), 'src/pages', folderName);

const humanize = (slug) =>
  slug.replace(/[-_]/g, ' ').replace(/\\b\\w/g, (l) => l.toUpperCase());

// Every Markdown post in this project, sorted by file name
let posts = [];
try {{
  const entries = await readdir(projectDir);
  posts = entries
    .filter((file) => file.endsWith('.md'))
    .sort()
    .map((file) => {{
      const slug = file.slice(0, -'.md'.length);
      return {{ slug, label: humanize(slug), href: `/${{folderName}}/${{slug}}` }};
    }});
}} catch (error) {{
  console.log('No posts found yet');
}}
---

<ProjectLayout title={{displayName}} projectName={{projectName}}>
  <h2>Posts</h2>

  {{posts.length > 0 ? (
    <div class="post-grid">
      {{posts.map((post) => (
        <a href={{post.href}} class="card post-card">
          {{post.label}}
        </a>
      ))}}
    </div>
  ) : (
    <div class="card">
      <h3>No posts yet</h3>
      <p>Create your first post with Studio.</p>
    </div>
  )}}
</ProjectLayout>
'''

POST_TEMPLATE = '''---
title: {title_literal}
date: {date}
---

# {title}

{placeholder}
'''


def render_layout(folder_name: str) -> str:
    """Render a project's _layout.astro."""
    return LAYOUT_TEMPLATE.format(folder_name=render_value(folder_name))


def render_listing(display_name: str, folder_name: str) -> str:
    """Render a project's index.astro listing page."""
    return LISTING_TEMPLATE.format(
        display_name=render_value(display_name),
        folder_name=render_value(folder_name),
    )


def render_post(title: str, date: str) -> str:
    """Render the body of a new post.

    Args:
        title: Post title, used in front matter and as the heading
        date: Creation date (YYYY-MM-DD)
    """
    return POST_TEMPLATE.format(
        title_literal=render_value(title),
        title=title,
        date=date,
        placeholder=POST_PLACEHOLDER,
    )
