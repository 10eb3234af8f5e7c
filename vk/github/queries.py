"""
GraphQL documents used by vk.

Paginated documents take a ``$cursor`` variable, except the review comment
walk which uses ``$after``.
"""

THREADS_QUERY = """
    query ReviewThreads($owner: String!, $name: String!, $number: Int!, $cursor: String) {
      repository(owner: $owner, name: $name) {
        pullRequest(number: $number) {
          reviewThreads(first: 100, after: $cursor) {
            nodes {
              id
              isResolved
              isOutdated
              comments(first: 100) {
                nodes {
                  body
                  diffHunk
                  originalPosition
                  position
                  path
                  url
                  author { login }
                }
                pageInfo { hasNextPage endCursor }
              }
            }
            pageInfo { hasNextPage endCursor }
          }
        }
      }
    }
"""

COMMENT_QUERY = """
    query ThreadComments($id: ID!, $cursor: String) {
      node(id: $id) {
        ... on PullRequestReviewThread {
          comments(first: 100, after: $cursor) {
            nodes {
              body
              diffHunk
              originalPosition
              position
              path
              url
              author { login }
            }
            pageInfo { hasNextPage endCursor }
          }
        }
      }
    }
"""

ISSUE_QUERY = """
    query Issue($owner: String!, $name: String!, $number: Int!) {
      repository(owner: $owner, name: $name) {
        issue(number: $number) {
          title
          body
        }
      }
    }
"""

# Up to 10 candidates so forks using the same branch name can be told apart
PR_FOR_BRANCH_QUERY = """
    query PullRequestForBranch($owner: String!, $name: String!, $headRef: String!) {
      repository(owner: $owner, name: $name) {
        pullRequests(headRefName: $headRef, first: 10, states: [OPEN, MERGED]) {
          nodes {
            number
            headRepository {
              owner { login }
            }
          }
        }
      }
    }
"""

REVIEWS_QUERY = """
    query Reviews($owner: String!, $name: String!, $number: Int!, $cursor: String) {
      repository(owner: $owner, name: $name) {
        pullRequest(number: $number) {
          reviews(first: 100, after: $cursor) {
            nodes {
              body
              state
              submittedAt
              author { login }
            }
            pageInfo { hasNextPage endCursor }
          }
        }
      }
    }
"""

REVIEW_COMMENTS_PAGE_QUERY = """
    query ReviewComments($owner: String!, $name: String!, $number: Int!, $after: String) {
      repository(owner: $owner, name: $name) {
        pullRequest(number: $number) {
          reviewComments(first: 100, after: $after) {
            pageInfo { endCursor hasNextPage }
            nodes { databaseId pullRequestReviewThread { id } }
          }
        }
      }
    }
"""

RESOLVE_THREAD_MUTATION = """
    mutation ResolveThread($id: ID!) {
      resolveReviewThread(input: {threadId: $id}) { clientMutationId }
    }
"""
